"""Tests for csdn_sync.processors.markdown module."""

from csdn_sync.processors.markdown import html_to_markdown


class TestHtmlToMarkdown:
    def test_atx_headings(self) -> None:
        result = html_to_markdown("<h1>Title</h1><h3>Section</h3>")
        assert "# Title" in result
        assert "### Section" in result
        assert "===" not in result

    def test_fenced_code_keeps_language(self) -> None:
        html = '<pre><code class="language-python">def f():\n    return 1\n\n</code></pre>'
        assert html_to_markdown(html) == "```python\ndef f():\n    return 1\n```"

    def test_language_from_mixed_classes(self) -> None:
        html = '<pre><code class="prism language-js hljs">let a = 1;</code></pre>'
        assert html_to_markdown(html) == "```js\nlet a = 1;\n```"

    def test_fenced_code_without_language(self) -> None:
        assert html_to_markdown("<pre><code>x = 1</code></pre>") == "```\nx = 1\n```"

    def test_code_block_between_paragraphs(self) -> None:
        html = "<p>Before</p><pre><code class=\"language-sh\">ls -la</code></pre><p>After</p>"
        result = html_to_markdown(html)
        assert "Before\n\n```sh\nls -la\n```\n\nAfter" == result

    def test_inline_formatting(self) -> None:
        result = html_to_markdown("<p>Hello <strong>world</strong> and <a href=\"https://x.io\">link</a></p>")
        assert result == "Hello **world** and [link](https://x.io)"

    def test_markdown_input_is_unchanged(self) -> None:
        markdown = "# Title\n\nSome *emphasis* and snake_case_name.\n\n```python\nprint(1)\n```"
        assert html_to_markdown(markdown) == markdown
        assert html_to_markdown(html_to_markdown(markdown)) == markdown

    def test_empty(self) -> None:
        assert html_to_markdown("") == ""
        assert html_to_markdown(None) == ""

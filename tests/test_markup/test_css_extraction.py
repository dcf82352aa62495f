"""Tests for embedded CSS extraction."""

from html2uitk.markup.extract import EXTRACTED_HEADER, extract_css

HTML = """
<html>
<head>
<style>.a { color: red; }</style>
<style media="screen and (max-width: 600px)">
<!-- hidden -->
.b { color: blue; }
</style>
</head>
<body>
<div style="margin: 0">x</div>
<p style="  ">y</p>
</body>
</html>
"""


class TestExtractCss:
    def test_style_blocks_and_inline(self):
        extracted = extract_css(HTML)
        assert extracted.has_css
        assert [b.css for b in extracted.blocks] == [
            ".a { color: red; }",
            ".b { color: blue; }",
            ".inline-style-1 { margin: 0 }",
        ]
        assert extracted.blocks[1].media == "screen and (max-width: 600px)"
        assert extracted.blocks[0].media is None

    def test_without_inline(self):
        extracted = extract_css(HTML, include_inline=False)
        assert len(extracted.blocks) == 2

    def test_cdata_unwrapped(self):
        extracted = extract_css("<style><![CDATA[.c { color: red; }]]></style>")
        assert extracted.blocks[0].css == ".c { color: red; }"

    def test_no_css(self):
        extracted = extract_css("<p>plain</p>")
        assert not extracted.has_css
        assert extracted.blocks == []

    def test_combined(self):
        combined = extract_css(HTML).combined()
        assert combined == (
            f"{EXTRACTED_HEADER}\n\n"
            ".a { color: red; }\n\n"
            "@media screen and (max-width: 600px) {\n"
            ".b { color: blue; }\n"
            "}\n\n"
            ".inline-style-1 { margin: 0 }\n"
        )

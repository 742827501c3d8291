"""Tests for clickthrough url rewriting."""
import pytest

from richmedia_uploader.exporters import (
    REDIRECT_EXPRESSION,
    ConversioClickthroughRewriter,
    GWDClickthroughRewriter,
)

EXIT_CALL = "gwd.actions.gwdGoogleAd.exit('gwd-ad', 'Btn-Exit', {url}, true, true);"


def _handlers(*urls):
    lines = ['<script type="text/javascript" gwd-events="handlers">']
    for index, url in enumerate(urls, start=1):
        lines.append(f"    gwd.auto_Btn_Exit_{index}Action = function(event) {{")
        lines.append(f"        {EXIT_CALL.format(url=url)}")
        lines.append("    };")
    lines.append("</script>")
    return "\n".join(lines)


class TestGWDClickthroughRewriter:
    def test_rewrites_single_exit_call(self):
        body = """
            <script type="text/javascript" gwd-events="handlers">
                gwd.auto_Btn_Exit_1Action = function(event) {
                    // GWD Predefined Function
                    gwd.actions.gwdGoogleAd.exit('gwd-ad', 'Btn-Exit', 'http://www.google.com/', true, true);
                };
            </script>
        """
        expected = body.replace(
            "'http://www.google.com/',",
            "decodeURIComponent(window.location.href.split('?adserver=')[1]) + 'http://www.google.com/',",
        )

        assert GWDClickthroughRewriter().rewrite(body) == expected

    def test_rewrites_unspaced_call(self):
        body = "gwd.actions.gwdGoogleAd.exit('gwd-ad','Btn-Exit','http://www.google.com/',true,true);"
        assert GWDClickthroughRewriter().rewrite(body) == (
            "gwd.actions.gwdGoogleAd.exit('gwd-ad','Btn-Exit',"
            "decodeURIComponent(window.location.href.split('?adserver=')[1]) + "
            "'http://www.google.com/',true,true);"
        )

    def test_rewrites_each_exit_call_independently(self):
        urls = [
            "'https://www.google.com/'",
            "'https://www.google.ca'",
            "'https://www.google.co.uk'",
            "'https://google.org'",
            '"https://google.org"',
        ]
        expected_urls = [
            f"{REDIRECT_EXPRESSION} + 'https://www.google.com/'",
            f"{REDIRECT_EXPRESSION} + 'https://www.google.ca'",
            f"{REDIRECT_EXPRESSION} + 'https://www.google.co.uk'",
            f"{REDIRECT_EXPRESSION} + 'https://google.org'",
            f"{REDIRECT_EXPRESSION} + 'https://google.org'",
        ]

        output = GWDClickthroughRewriter().rewrite(_handlers(*urls))

        assert output == _handlers(*expected_urls)
        assert output.count(REDIRECT_EXPRESSION) == 5

    def test_leaves_calls_without_url_untouched(self):
        body = "gwd.actions.gwdGoogleAd.exit('gwd-ad', 'Btn-Exit', clickTag, true, true);"
        assert GWDClickthroughRewriter().rewrite(body) == body

    def test_ignores_urls_outside_exit_calls(self):
        body = "<a href='https://example.com/', data-x>link</a>"
        assert GWDClickthroughRewriter().rewrite(body) == body

    def test_no_match_is_noop(self):
        assert GWDClickthroughRewriter().rewrite("") == ""
        assert GWDClickthroughRewriter().rewrite("<html></html>") == "<html></html>"


class TestConversioClickthroughRewriter:
    EXPECTED_URL = f'{REDIRECT_EXPRESSION} + "http://plancherspayless.com/fr/"'

    @pytest.mark.parametrize(
        "source, expected_prefix",
        [
            ('var clickTag = "http://plancherspayless.com/fr/"', "var clickTag = "),
            ("var clickTag = 'http://plancherspayless.com/fr/'", "var clickTag = "),
            ('let clickTag = "http://plancherspayless.com/fr/"', "let clickTag = "),
            ('const clickTag = "http://plancherspayless.com/fr/"', "const clickTag = "),
            ('var ClickTAG = "http://plancherspayless.com/fr/"', "var ClickTAG = "),
            ('var clickTag  =  "http://plancherspayless.com/fr/"', "var clickTag  =  "),
            ('var clickTag="http://plancherspayless.com/fr/"', "var clickTag="),
        ],
    )
    def test_rewrites_click_tag_declaration(self, source, expected_prefix):
        body = f"""
                <script>
                    {source}
                </script>
            """
        expected = f"""
                <script>
                    {expected_prefix}{self.EXPECTED_URL}
                </script>
            """
        assert ConversioClickthroughRewriter().rewrite(body) == expected

    def test_keeps_statement_terminator(self):
        body = 'var clickTag = "https://example.com/";'
        assert ConversioClickthroughRewriter().rewrite(body) == (
            f'var clickTag = {REDIRECT_EXPRESSION} + "https://example.com/";'
        )

    def test_leaves_non_url_click_tag_untouched(self):
        body = 'var clickTag = "";'
        assert ConversioClickthroughRewriter().rewrite(body) == body

    def test_ignores_other_variables(self):
        body = 'var landing = "https://example.com/";'
        assert ConversioClickthroughRewriter().rewrite(body) == body

    def test_ignores_assignment_without_declaration(self):
        body = 'clickTag = "https://example.com/";'
        assert ConversioClickthroughRewriter().rewrite(body) == body

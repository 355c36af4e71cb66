"""Tests for server and location selection."""

import pytest

from nginx_route_check.engine.matcher import (
    check_url,
    location_match,
    outranks,
    select_server,
    server_match,
)
from nginx_route_check.engine.target import parse_target_url
from nginx_route_check.errors import InvalidPatternError, InvalidURLError
from nginx_route_check.model.result import CheckResult
from nginx_route_check.model.server import MatchKind, Server
from nginx_route_check.parser.builder import build_config
from nginx_route_check.parser.nginx_conf import NginxConfigParser


def build(text):
    return build_config(NginxConfigParser().parse(text))


def target(url):
    return parse_target_url(url)


def server_with(*lines):
    """Implicit server built from location lines."""
    return build("\n".join(lines)).servers[0]


class TestServerMatch:
    """Scores produced per server_name."""

    @pytest.mark.parametrize(
        "name, host, expected",
        [
            ("example.com", "example.com", [(4,)]),
            ("*.example.com", "www.example.com", [(3, 13)]),
            ("*.example.com", "example.com", []),
            ("www.example.*", "www.example.org", [(2, 13)]),
            ("~^foo\\.", "foo.test", [(1, 500)]),
            ("~^foo\\.", "bar.foo.test", []),
            ("other.com", "example.com", []),
        ],
    )
    def test_single_name(self, name, host, expected):
        server = Server(order=500, server_names=[name])

        assert server_match(server, target(f"http://{host}/")) == expected

    def test_trailing_wildcard_strips_two_characters(self):
        # "www.example*" is compared as "www.exampl"
        server = Server(order=500, server_names=["www.example*"])

        assert server_match(server, target("http://www.examplzz.net/")) == [(2, 12)]

    def test_lone_star_is_leading_wildcard(self):
        server = Server(order=500, server_names=["*"])

        assert server_match(server, target("http://anything/")) == [(3, 1)]

    def test_regex_is_case_sensitive_search(self):
        server = Server(order=7, server_names=["~API", "~api"])

        assert server_match(server, target("http://x.api.test/")) == [(1, 7)]

    def test_one_score_per_name(self):
        server = Server(order=500, server_names=["example.com", "*.com", "~example"])

        assert server_match(server, target("http://example.com/")) == [(4,), (3, 5), (1, 500)]

    def test_invalid_regex_raises(self):
        server = Server(order=500, server_names=["~(unclosed"])

        with pytest.raises(InvalidPatternError) as exc_info:
            server_match(server, target("http://example.com/"))
        assert exc_info.value.pattern == "(unclosed"


class TestOutranks:
    """Score comparison."""

    @pytest.mark.parametrize(
        "candidate, best, expected",
        [
            ((4,), (3, 20), True),
            ((3, 5), (4,), False),
            ((3, 20), (3, 13), True),
            ((3, 13), (3, 13), False),
            ((1, 999), (1, 1000), False),
            ((1, 1000), (1, 999), True),
            ((4,), (4,), False),
            ((1, 5), (0,), True),
        ],
    )
    def test_outranks(self, candidate, best, expected):
        assert outranks(candidate, best) is expected


class TestSelectServer:
    """Selection across all servers."""

    def test_exact_beats_wildcard_regardless_of_order(self):
        for text in (
            "server { server_name *.example.com; } server { server_name www.example.com; }",
            "server { server_name www.example.com; } server { server_name *.example.com; }",
        ):
            config = build(text)
            server, score = select_server(config, target("http://www.example.com/"))

            assert server.server_names == ["www.example.com"]
            assert score == (4,)

    def test_longer_leading_wildcard_wins(self):
        config = build("server { server_name *.example.com; } server { server_name *.www.example.com; }")
        server, score = select_server(config, target("http://a.www.example.com/"))

        assert server.server_names == ["*.www.example.com"]
        assert score == (3, 17)

    def test_leading_wildcard_beats_trailing(self):
        config = build("server { server_name www.example.*; } server { server_name *.example.com; }")
        server, _ = select_server(config, target("http://www.example.com/"))

        assert server.server_names == ["*.example.com"]

    def test_regex_tie_goes_to_earlier_server(self):
        config = build("server { server_name ~foo; } server { server_name ~\\.test$; }")
        server, score = select_server(config, target("http://foo.test/"))

        assert server is config.servers[0]
        assert score == (1, 1000)

    def test_equal_exact_keeps_first(self):
        config = build("server { server_name a.com; root /1; } server { server_name a.com; root /2; }")
        server, _ = select_server(config, target("http://a.com/"))

        assert server.root == "/1"

    def test_no_match(self):
        config = build("server { server_name a.com; }")

        assert select_server(config, target("http://b.com/")) == (None, None)


class TestLocationMatch:
    """Location phases: exact, prefix, priority prefix, regex."""

    def test_exact_wins_immediately(self):
        server = server_with("location / { }", "location ~ .* { }", "location = /x { }")
        location, examined = location_match(server, target("http://h/x"))

        assert location.kind is MatchKind.EXACT
        assert examined == [location]

    def test_exact_must_equal_whole_path(self):
        server = server_with("location = /x { }", "location / { }")
        location, _ = location_match(server, target("http://h/x/y"))

        assert location.path == "/"

    def test_longest_prefix_wins(self):
        server = server_with("location / { }", "location /images { }")
        location, examined = location_match(server, target("http://h/images/a.png"))

        assert location.path == "/images"
        assert location.kind is MatchKind.PREFIX
        assert [l.path for l in examined] == ["/", "/images"]

    def test_equal_length_prefix_keeps_first(self):
        server = server_with("location /a { }", "location ^~ /a { }", "location ~ ^/a { }")
        location, examined = location_match(server, target("http://h/a"))

        # the plain prefix stays best, so regexes are still tried
        assert location.kind is MatchKind.REGEX
        assert [l.kind for l in examined] == [MatchKind.PREFIX, MatchKind.PREFIX_PRIORITY, MatchKind.REGEX]

    def test_priority_prefix_skips_regex(self):
        server = server_with("location ^~ /img/ { }", "location ~ \\.png$ { }")
        location, examined = location_match(server, target("http://h/img/a.png"))

        assert location.path == "/img/"
        assert location.kind is MatchKind.PREFIX_PRIORITY
        assert [l.path for l in examined] == ["/img/"]

    def test_priority_prefix_not_selected_when_shorter(self):
        server = server_with("location ^~ /img/ { }", "location /img/static/ { }", "location ~ static { }")
        location, examined = location_match(server, target("http://h/img/static/x"))

        assert location.path == "static"
        assert [l.path for l in examined] == ["/img/", "/img/static/", "static"]

    def test_regex_beats_longest_prefix(self):
        server = server_with("location /images/ { }", "location ~* \\.(png|jpg)$ { }")
        location, _ = location_match(server, target("http://h/images/a.PNG"))

        assert location.kind is MatchKind.REGEX_NOCASE

    def test_case_sensitive_regex(self):
        server = server_with("location / { }", "location ~ \\.PNG$ { }")
        location, examined = location_match(server, target("http://h/a.png"))

        assert location.path == "/"
        assert [l.path for l in examined] == ["/"]

    def test_first_regex_in_declaration_order(self):
        server = server_with("location ~ png { }", "location ~ \\.png$ { }")
        location, examined = location_match(server, target("http://h/x.png"))

        assert location.path == "png"
        assert len(examined) == 1

    def test_no_location(self):
        server = server_with("location /api { }", "location = / { }", "location ~ ^/v2 { }")
        location, examined = location_match(server, target("http://h/other"))

        assert location is None
        assert examined == []

    def test_invalid_regex_raises_only_when_tried(self):
        server = server_with("location = /x { }", "location ~ ([a { }")

        location, _ = location_match(server, target("http://h/x"))
        assert location.path == "/x"
        with pytest.raises(InvalidPatternError):
            location_match(server, target("http://h/y"))


class TestCheckUrl:
    """End-to-end selection on a built Config."""

    def test_sample_config(self, sample_nginx_conf):
        config = build(sample_nginx_conf)

        result = check_url(config, "http://www.example.com/static/logo.png")
        assert result.server is config.servers[0]
        assert result.server_score == (4,)
        assert result.location == "/static/"
        assert result.location_kind is MatchKind.PREFIX_PRIORITY

        result = check_url(config, "http://www.example.com/api/v2/users")
        assert result.location == "^/api/v[0-9]+/"
        assert [l.path for l in result.examined_locations] == ["/", "^/api/v[0-9]+/"]

        result = check_url(config, "http://shop.example.com/cart")
        assert result.server is config.servers[1]
        assert result.server_score == (3, 13)

        result = check_url(config, "http://api42.example.org/v1/ping")
        assert result.server is config.servers[2]
        assert result.server_score == (1, 998)
        assert result.location == "/v1/"

    def test_no_server_match_is_empty_result(self, sample_nginx_conf):
        result = check_url(build(sample_nginx_conf), "http://unknown.net/")

        assert result == CheckResult()
        assert result.matched is False

    def test_implicit_server_accepts_any_host(self, serverless_nginx_conf):
        config = build(serverless_nginx_conf)
        result = check_url(config, "https://whatever.invalid/index.php")

        assert result.server is config.servers[0]
        assert result.server_score is None
        assert result.location == "\\.php$"
        assert result.location_kind is MatchKind.REGEX

    def test_server_matched_but_no_location(self):
        result = check_url(build("server { server_name a.com; location /x { } }"), "http://a.com/y")

        assert result.server is not None
        assert result.location is None
        assert result.location_kind is None

    def test_invalid_url(self, sample_nginx_conf):
        with pytest.raises(InvalidURLError):
            check_url(build(sample_nginx_conf), "not a url")

    def test_glued_braces(self):
        config = build("server{ server_name example.com; location / { } }")
        result = check_url(config, "http://example.com/")

        assert result.server_score == (4,)
        assert result.location == "/"
        assert result.location_kind is MatchKind.PREFIX


class TestNamedGroups:
    """PCRE-style named groups as written in nginx configs."""

    def test_server_name_with_named_group(self):
        server = Server(order=1000, server_names=["~^(?<sub>.+)\\.example\\.com$"])

        assert server_match(server, target("http://www.example.com/")) == [(1, 1000)]

    def test_location_with_named_group(self):
        server = server_with("location / { }", "location ~ ^/users/(?<id>\\d+)$ { }")
        location, _ = location_match(server, target("http://h/users/42"))

        assert location.kind is MatchKind.REGEX
        assert location.path == "^/users/(?<id>\\d+)$"

    def test_named_backreference(self):
        server = server_with("location ~ ^/(?<seg>[a-z]+)/\\k<seg>$ { }")

        assert location_match(server, target("http://h/ab/ab"))[0] is not None
        assert location_match(server, target("http://h/ab/cd"))[0] is None

    def test_lookbehind_untouched(self):
        server = server_with("location ~ (?<!/admin)/panel$ { }")

        assert location_match(server, target("http://h/user/panel"))[0] is not None
        assert location_match(server, target("http://h/admin/panel"))[0] is None

    def test_invalid_named_group_reports_original_pattern(self):
        server = Server(order=1000, server_names=["~(?<1bad>x)"])

        with pytest.raises(InvalidPatternError) as exc_info:
            server_match(server, target("http://x/"))
        assert exc_info.value.pattern == "(?<1bad>x)"

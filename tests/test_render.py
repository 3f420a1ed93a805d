"""Tests for the funding tree renderer."""

from __future__ import annotations

import pytest

from cargo_fund.aggregate import group_by_links
from cargo_fund.models import Link, PackageRef, Platform
from cargo_fund.render import GLYPHS, Level, Role, classify_position, render_tree


def _link(platform: str, uri: str) -> Link:
    return Link(Platform.parse(platform), uri)


def _pkg(name: str, version: str) -> PackageRef:
    return PackageRef(name, version, f"{name} {version}")


def test_classify_position_roles() -> None:
    assert classify_position(0, 1) is Role.ONLY
    assert classify_position(0, 3) is Role.FIRST
    assert classify_position(1, 3) is Role.MIDDLE
    assert classify_position(2, 3) is Role.LAST
    assert classify_position(1, 2) is Role.LAST
    with pytest.raises(IndexError):
        classify_position(3, 3)


def test_glyph_table_covers_every_level_and_role() -> None:
    for level in Level:
        for role in Role:
            assert len(GLYPHS[(level, role)]) == 2


def test_render_tree_single_group_of_many_links() -> None:
    links = {
        _link("CUSTOM", "https://acfoltzer.net/bare_relative_link"),
        _link("CUSTOM", "https://www.acfoltzer.net/"),
        _link("CUSTOM", "https://www.acfoltzer.net/another_url"),
        _link("ISSUEHUNT", "https://issuehunt.io/r/acfoltzer"),
        _link("KO_FI", "https://ko-fi.com/acfoltzer"),
        _link("LIBERAPAY", "https://liberapay.com/acfoltzer"),
        _link("PATREON", "https://patreon.com/acfoltzer"),
    }
    grouped = group_by_links({_pkg("funding-test", "0.1.0"): links})

    output = render_tree("/work/client-package", grouped, 1, 3)

    assert output == (
        "/work/client-package (found funding links for 1 out of 3 dependencies)\n"
        "──┬─ https://acfoltzer.net/bare_relative_link\n"
        "  ├─ https://www.acfoltzer.net/\n"
        "  ├─ https://www.acfoltzer.net/another_url\n"
        "  ├─ https://issuehunt.io/r/acfoltzer\n"
        "  ├─ https://ko-fi.com/acfoltzer\n"
        "  ├─ https://liberapay.com/acfoltzer\n"
        "  └─ https://patreon.com/acfoltzer\n"
        "     └─ funding-test 0.1.0\n"
    )


def test_render_tree_many_groups() -> None:
    dannyguo = {
        _link("CUSTOM", "https://www.buymeacoffee.com/dannyguo"),
        _link("CUSTOM", "https://www.paypal.me/DannyGuo"),
        _link("KO_FI", "https://ko-fi.com/dannyguo"),
    }
    resolved = {
        _pkg("strsim", "0.8.0"): dannyguo,
        _pkg("remove_dir_all", "0.5.2"): {_link("GITHUB", "https://github.com/sponsors/XAMPPRocky")},
        _pkg("anyhow", "1.0.28"): {_link("GITHUB", "https://github.com/sponsors/dtolnay")},
        _pkg("syn", "1.0.18"): {_link("GITHUB", "https://github.com/sponsors/dtolnay")},
        _pkg("want", "0.3.0"): {_link("GITHUB", "https://github.com/sponsors/seanmonstar")},
        _pkg("httparse", "1.3.4"): {_link("GITHUB", "https://github.com/sponsors/seanmonstar")},
    }

    output = render_tree("$HOME/cargo-fund", group_by_links(resolved), 6, 138)

    assert output == (
        "$HOME/cargo-fund (found funding links for 6 out of 138 dependencies)\n"
        "├─┬─ https://www.buymeacoffee.com/dannyguo\n"
        "│ ├─ https://www.paypal.me/DannyGuo\n"
        "│ └─ https://ko-fi.com/dannyguo\n"
        "│    └─ strsim 0.8.0\n"
        "├─── https://github.com/sponsors/XAMPPRocky\n"
        "│    └─ remove_dir_all 0.5.2\n"
        "├─── https://github.com/sponsors/dtolnay\n"
        "│    ├─ anyhow 1.0.28\n"
        "│    └─ syn 1.0.18\n"
        "└─── https://github.com/sponsors/seanmonstar\n"
        "     ├─ httparse 1.3.4\n"
        "     └─ want 0.3.0\n"
    )


def test_render_tree_last_group_with_several_links() -> None:
    resolved = {
        _pkg("a", "1.0.0"): {_link("CUSTOM", "https://a.example/")},
        _pkg("b", "1.0.0"): {_link("PATREON", "https://patreon.com/b"), _link("TIDELIFT", "https://tidelift.com/b")},
    }

    output = render_tree("root", group_by_links(resolved), 2, 2)

    assert output.splitlines()[1:] == [
        "├─── https://a.example/",
        "│    └─ a 1.0.0",
        "└─┬─ https://patreon.com/b",
        "  └─ https://tidelift.com/b",
        "     └─ b 1.0.0",
    ]


def test_render_tree_without_groups_prints_only_header() -> None:
    assert render_tree("root", {}, 0, 4) == "root (found funding links for 0 out of 4 dependencies)\n"


def test_render_tree_is_byte_stable() -> None:
    resolved = {
        _pkg("x", "0.1.0"): {_link("GITHUB", "https://github.com/sponsors/x"), _link("OTHER_THING", "https://o.example/")},
        _pkg("y", "0.2.0"): {_link("OTHER_THING", "https://o.example/"), _link("GITHUB", "https://github.com/sponsors/x")},
        _pkg("z", "0.3.0"): {_link("LIBERAPAY", "https://liberapay.com/z")},
    }
    first = render_tree("root", group_by_links(resolved), 3, 3)
    second = render_tree("root", group_by_links(dict(reversed(list(resolved.items())))), 3, 3)
    assert first.encode("utf-8") == second.encode("utf-8")

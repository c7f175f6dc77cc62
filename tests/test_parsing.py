from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from snapper_tui.models import ConfigField
from snapper_tui.parsing import (
    NO_DESCRIPTION,
    first_line,
    is_ruler_line,
    normalize_bars,
    parse_config_dump,
    parse_config_names,
    parse_snapshot_id,
    parse_snapshot_listing,
    parse_wide_listing,
    split_key_value,
)


def test_listing_uses_cleanup_as_placeholder_description() -> None:
    snaps = parse_snapshot_listing("5|2024-01-01|root||number|single\n", "root")
    assert len(snaps) == 1
    snap = snaps[0]
    assert snap.id == 5
    assert snap.config == "root"
    assert snap.date == "2024-01-01"
    assert snap.user == "root"
    assert snap.description == "[number]"
    assert snap.cleanup == "number"
    assert snap.kind == "single"


def test_listing_falls_back_to_kind_then_no_description() -> None:
    text = "6 | 2024-01-02 | root |  | - | pre\n7 | 2024-01-03 | root |  | - | -\n"
    snaps = parse_snapshot_listing(text)
    assert [s.description for s in snaps] == ["[pre]", NO_DESCRIPTION]


def test_listing_skips_headers_rulers_and_blank_lines() -> None:
    text = "\n".join(
        [
            "# | Date | User | Description | Cleanup | Type",
            "--+------+------+-------------+---------+-----",
            "",
            "Number | Date | User | Description | Cleanup | Type",
            "0 | | root | current | | single",
            "1 | 2024-01-01 | root | boot | number | single",
        ]
    )
    snaps = parse_snapshot_listing(text, "root")
    assert [s.id for s in snaps] == [0, 1]
    assert snaps[1].description == "boot"


def test_listing_normalizes_box_drawing_bars() -> None:
    text = "─────┼──────\n3 │ 2024-01-01 │ root │ desc │ timeline │ single\n"
    snaps = parse_snapshot_listing(text)
    assert len(snaps) == 1
    assert snaps[0].cleanup == "timeline"
    assert snaps[0].description == "desc"


def test_listing_extra_pipes_stay_in_last_field() -> None:
    snaps = parse_snapshot_listing("4|d|u|x|y|single\n")
    assert snaps[0].kind == "single"
    snaps = parse_snapshot_listing("4|d|u|a|b|c|d\n")
    assert snaps[0].kind == "c|d"


def test_listing_three_field_fallback() -> None:
    snaps = parse_snapshot_listing("7 | 2024-01-01 | hello\n8 | 2024-01-02 |\n")
    assert [(s.id, s.date, s.description) for s in snaps] == [
        (7, "2024-01-01", "hello"),
        (8, "2024-01-02", NO_DESCRIPTION),
    ]
    assert snaps[0].kind == ""


def test_listing_rejects_negative_and_garbage_ids() -> None:
    assert parse_snapshot_listing("-3|d|u|x|y|z\nabc|d|u|x|y|z\n") == []


def test_snapshot_id_accepts_active_markers() -> None:
    assert parse_snapshot_id("12") == 12
    assert parse_snapshot_id(" 0* ") == 0
    assert parse_snapshot_id("5+") == 5
    assert parse_snapshot_id("-3") is None
    assert parse_snapshot_id("") is None


def test_wide_listing_layout() -> None:
    text = "\n".join(
        [
            " # | Type   | Pre # | Date       | User | Cleanup | Description | Userdata",
            "---+--------+-------+------------+------+---------+-------------+---------",
            " 1 | pre    |       | 2024-01-01 | root | number  | zypp        |",
            " 2 | post   |     1 | 2024-01-01 | root | number  |             |",
        ]
    )
    snaps = parse_wide_listing(text, "root")
    assert [s.id for s in snaps] == [1, 2]
    assert snaps[0].kind == "pre"
    assert snaps[0].description == "zypp"
    assert snaps[1].description == "[number]"
    assert snaps[1].config == "root"


def test_ruler_line_detection() -> None:
    assert is_ruler_line("----+----")
    assert is_ruler_line("═══╪═══")
    assert not is_ruler_line("")
    assert not is_ruler_line("1 | a")
    assert normalize_bars("a┃b│c") == "a|b|c"


def test_config_names_from_table_with_exists_filter() -> None:
    text = "\n".join(
        [
            "Config | Subvolume",
            "-------+----------",
            "root   | /",
            "home   | /home",
            "ghost  | /ghost",
        ]
    )
    assert parse_config_names(text) == ["ghost", "home", "root"]
    assert parse_config_names(text, exists=lambda n: n != "ghost") == ["home", "root"]


def test_config_names_plain_lines_are_deduplicated() -> None:
    assert parse_config_names("root\nroot\n  home  /home\n") == ["home", "root"]


def test_config_dump_mixed_separators() -> None:
    fields = parse_config_dump("SYNC_ACL = yes\nTIMELINE_CREATE=no\n")
    assert [(f.key, f.value) for f in fields] == [("SYNC_ACL", "yes"), ("TIMELINE_CREATE", "no")]
    assert not any(f.modified for f in fields)
    assert all(f.original == f.value for f in fields)


def test_config_dump_pipe_table_skips_header_and_ruler() -> None:
    text = "Key              | Value\n-----------------+------\nALLOW_GROUPS     |\nNUMBER_LIMIT     | 50\n"
    fields = parse_config_dump(text)
    assert [(f.key, f.value) for f in fields] == [("ALLOW_GROUPS", ""), ("NUMBER_LIMIT", "50")]


def test_config_dump_rejects_config_label_line() -> None:
    assert parse_config_dump("Config: root\n") == []


def test_config_dump_tab_and_space_layouts() -> None:
    fields = parse_config_dump("FSTYPE\tbtrfs\nSUBVOLUME    /\n")
    assert [(f.key, f.value) for f in fields] == [("FSTYPE", "btrfs"), ("SUBVOLUME", "/")]


def test_split_key_value_strips_trailing_colon_from_key() -> None:
    assert split_key_value("FREE_LIMIT: = 0.2") == ("FREE_LIMIT", "0.2")


def test_split_key_value_first_heuristic_wins() -> None:
    assert split_key_value("A=b:c") == ("A", "b:c")
    assert split_key_value("A | b=c") == ("A", "b=c")
    assert split_key_value("lonely") is None
    assert split_key_value("= value") is None


def test_config_field_set_value_tracks_modification() -> None:
    field = ConfigField.parsed("NUMBER_LIMIT", "50")
    field.set_value("10")
    assert field.modified
    field.set_value("50")
    assert not field.modified


def test_first_line_skips_blank_lines() -> None:
    assert first_line("\n\n  mounted at /mnt \nmore") == "mounted at /mnt"
    assert first_line("") == ""

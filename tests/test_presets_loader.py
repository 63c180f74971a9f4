import sqlite3

import pytest

from orrery.data_models import PlanetRecord
from orrery.presets_loader import (
    DataSourceError,
    SqlitePlanetSource,
    TextPlanetSource,
    format_planet_line,
    open_source,
    parse_planet_line,
)

SAMPLE = """# name orbit speed radius r g b
Mercury 90 0.04 6 169 169 169

Venus 150 0.025 10 230 200 120
# a comment between records
Earth 220 0.018 11 100 149 237
Broken 220 0.018 11 100 149
Mars 310 fast 8 188 39 50
Mars 310 0.014 8 188 39 50
"""


@pytest.fixture
def text_source(tmp_path):
    path = tmp_path / "planets.txt"
    path.write_text(SAMPLE, encoding="utf-8")
    return TextPlanetSource(str(path))


def test_parse_valid_line():
    record = parse_planet_line("Earth 220 0.018 11 100 149 237\n")
    assert record == PlanetRecord("Earth", 220.0, 0.018, 11.0, (100, 149, 237))


@pytest.mark.parametrize("line", [
    "# Earth 220 0.018 11 100 149 237",
    "",
    "   ",
    "a b",
    "Earth 220 0.018 11 100 149",
    "Earth 220 0.018 11 100 149 237 extra",
    "Earth x 0.018 11 100 149 237",
    "Earth 220 0.018 11 100 149 2.5",
    "Earth -1 0.018 11 100 149 237",
    "Earth 220 0.018 0 100 149 237",
    "Earth 220 0.018 11 300 149 237",
    "Earth inf 0.018 11 1 2 3",
    "Earth 220 nan 11 1 2 3",
    "Earth 220 0.018 -inf 1 2 3",
])
def test_parse_skips_comments_and_malformed(line):
    assert parse_planet_line(line) is None


def test_negative_speed_is_allowed():
    assert parse_planet_line("Retro 100 -0.02 5 1 2 3").angular_speed == pytest.approx(-0.02)


def test_format_then_parse():
    record = PlanetRecord("Xen", 500.0, 0.01, 12.0, (10, 20, 30))
    line = format_planet_line(record)
    assert line == "Xen 500.0000 0.010000 12.0000 10 20 30"
    assert parse_planet_line(line) == record


def test_text_load_skips_bad_lines(text_source):
    names = [r.name for r in text_source.load()]
    assert names == ["Mercury", "Venus", "Earth", "Mars"]


def test_missing_text_file_is_empty(tmp_path):
    assert TextPlanetSource(str(tmp_path / "nope.txt")).load() == []


def test_append_then_remove_round_trip(text_source):
    before = text_source.load()
    n = len(before)

    text_source.append(PlanetRecord("Xen", 500.0, 0.01, 12.0, (10, 20, 30)))
    after = text_source.load()
    assert len(after) == n + 1
    xen = after[-1]
    assert xen.name == "Xen"
    assert xen.orbit_radius == pytest.approx(500.0, abs=1e-3)
    assert xen.angular_speed == pytest.approx(0.01, abs=1e-5)
    assert xen.radius == pytest.approx(12.0, abs=1e-3)
    assert xen.color == (10, 20, 30)

    text_source.remove(n)
    final = text_source.load()
    assert len(final) == n
    assert "Xen" not in [r.name for r in final]
    assert final == before


def test_remove_keeps_comments_and_order(text_source):
    text_source.remove(1)
    text = open(text_source.path, encoding="utf-8").read()
    assert "Venus" not in text
    assert "# a comment between records" in text
    assert "Broken 220" in text
    assert [r.name for r in text_source.load()] == ["Mercury", "Earth", "Mars"]


def test_remove_out_of_range(text_source):
    with pytest.raises(IndexError):
        text_source.remove(4)
    with pytest.raises(IndexError):
        text_source.remove(-1)
    assert len(text_source.load()) == 4


def test_append_creates_file_and_fixes_missing_newline(tmp_path):
    path = tmp_path / "new.txt"
    source = TextPlanetSource(str(path))
    source.append(PlanetRecord("A", 1.0, 0.1, 1.0, (1, 1, 1)))
    assert [r.name for r in source.load()] == ["A"]

    path.write_text("A 1 0.1 1 1 1 1", encoding="utf-8")
    source.append(PlanetRecord("B", 2.0, 0.1, 1.0, (1, 1, 1)))
    assert [r.name for r in source.load()] == ["A", "B"]


def test_append_rejects_invalid_record(tmp_path):
    source = TextPlanetSource(str(tmp_path / "p.txt"))
    with pytest.raises(ValueError):
        source.append(PlanetRecord("Two words", 1.0, 0.1, 1.0, (1, 1, 1)))
    assert source.load() == []


@pytest.fixture
def db_source(tmp_path):
    source = SqlitePlanetSource(str(tmp_path / "planets.db"))
    source.seed([
        PlanetRecord("Mars", 310.0, 0.014, 8.0, (188, 39, 50)),
        PlanetRecord("Earth", 220.0, 0.018, 11.0, (100, 149, 237), "https://example.com/earth.png"),
        PlanetRecord("Jupiter", 620.0, 0.007, 26.0, (210, 180, 140)),
    ])
    return source


def test_db_orders_by_orbit_radius(db_source):
    records = db_source.load()
    assert [r.name for r in records] == ["Earth", "Mars", "Jupiter"]
    assert records[0].texture_url == "https://example.com/earth.png"
    assert records[1].texture_url is None


def test_db_append_and_remove(db_source):
    db_source.append(PlanetRecord("Xen", 500.0, 0.01, 12.0, (10, 20, 30)))
    assert [r.name for r in db_source.load()] == ["Earth", "Mars", "Xen", "Jupiter"]
    db_source.remove(2)
    assert [r.name for r in db_source.load()] == ["Earth", "Mars", "Jupiter"]
    with pytest.raises(IndexError):
        db_source.remove(3)


def test_db_null_name_gets_placeholder(db_source):
    with sqlite3.connect(db_source.path) as conn:
        conn.execute("INSERT INTO planets (name, orbit_radius, angular_speed, radius, color_r, color_g, color_b) "
                     "VALUES (NULL, 50, 0.1, 3, 1, 2, 3)")
    conn.close()
    assert db_source.load()[0].name == "Planet0"


def test_db_without_table_raises(tmp_path):
    with pytest.raises(DataSourceError):
        SqlitePlanetSource(str(tmp_path / "empty.db")).load()


def test_open_source_by_extension(tmp_path):
    assert isinstance(open_source(str(tmp_path / "p.db")), SqlitePlanetSource)
    assert isinstance(open_source(str(tmp_path / "p.SQLITE3")), SqlitePlanetSource)
    assert isinstance(open_source(str(tmp_path / "p.txt")), TextPlanetSource)

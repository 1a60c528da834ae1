import pytest

from setlist_reader.setlists import (
    FORMAT_HEADER,
    InMemoryDocumentViewer,
    SetlistFileStorage,
    SetlistFormatError,
    SetlistManager,
    parse_setlists,
    serialize_setlists,
)


def _sample_manager():
    manager = SetlistManager()
    first = manager.get_setlist(manager.create_setlist("Morning"))
    first.add_item("Intro", "/docs/intro.pdf")
    first.add_item("Hymn 12", "/docs/hymns/12.pdf")
    manager.create_setlist("Empty")
    third = manager.get_setlist(manager.create_setlist("Evening"))
    third.add_item("Finale", "C:\\scores\\finale.pdf")
    return manager


def _snapshot(manager):
    return [(s.name, [(i.name, i.path) for i in s.items]) for s in manager.setlists]


def test_serialize_exact_format():
    text = _sample_manager().serialize()
    assert text == (
        "SETLISTS_V1\n"
        "SETLIST:Morning\n"
        "ITEM:Intro\t/docs/intro.pdf\n"
        "ITEM:Hymn 12\t/docs/hymns/12.pdf\n"
        "SETLIST:Empty\n"
        "SETLIST:Evening\n"
        "ITEM:Finale\tC:\\scores\\finale.pdf\n"
        "END\n"
    )


def test_serialize_empty_collection():
    assert serialize_setlists([]) == f"{FORMAT_HEADER}\nEND\n"


def test_roundtrip_through_file(tmp_path):
    original = _sample_manager()
    path = tmp_path / "setlists.dat"
    assert original.save_to_file(path)

    restored = SetlistManager()
    assert restored.load_from_file(path)
    assert _snapshot(restored) == _snapshot(original)


def test_path_may_contain_tabs():
    setlists = parse_setlists("SETLISTS_V1\nSETLIST:S\nITEM:Name\t/odd\tpath.pdf\nEND\n")
    assert setlists[0].items[0].name == "Name"
    assert setlists[0].items[0].path == "/odd\tpath.pdf"


def test_serialize_flattens_line_breaks_and_name_tabs():
    manager = SetlistManager()
    setlist = manager.get_setlist(manager.create_setlist("Two\nLines"))
    setlist.add_item("Tab\tName", "/docs/a.pdf")
    restored = parse_setlists(manager.serialize())
    assert restored[0].name == "Two Lines"
    assert restored[0].items[0].name == "Tab Name"
    assert restored[0].items[0].path == "/docs/a.pdf"


def test_malformed_item_line_is_skipped():
    text = (
        "SETLISTS_V1\n"
        "SETLIST:Main\n"
        "ITEM:NoTabHere\n"
        "ITEM:Good\t/docs/good.pdf\n"
        "END\n"
    )
    setlists = parse_setlists(text)
    assert len(setlists) == 1
    assert [(i.name, i.path) for i in setlists[0].items] == [("Good", "/docs/good.pdf")]


def test_item_before_any_setlist_and_unknown_lines_are_skipped():
    text = (
        "SETLISTS_V1\n"
        "ITEM:Orphan\t/docs/orphan.pdf\n"
        "VERSION:2\n"
        "SETLIST:\n"
        "\n"
        "ITEM:Empty path\t\n"
        "ITEM:Kept\t/docs/kept.pdf\n"
    )
    setlists = parse_setlists(text)
    assert len(setlists) == 1
    assert setlists[0].name == ""
    assert [i.path for i in setlists[0].items] == ["/docs/kept.pdf"]


def test_parsing_stops_at_end_marker():
    text = "SETLISTS_V1\nSETLIST:A\nEND\nSETLIST:B\n"
    assert [s.name for s in parse_setlists(text)] == ["A"]


def test_windows_line_endings_are_accepted():
    text = "SETLISTS_V1\r\nSETLIST:A\r\nITEM:x\t/docs/x.pdf\r\nEND\r\n"
    setlists = parse_setlists(text)
    assert setlists[0].name == "A"
    assert setlists[0].items[0].path == "/docs/x.pdf"


@pytest.mark.parametrize("text", ["", "SETLISTS_V2\nEND\n", "SETLIST:A\nEND\n"])
def test_bad_header_raises(text):
    with pytest.raises(SetlistFormatError):
        parse_setlists(text)


def test_bad_header_leaves_manager_untouched(tmp_path):
    manager = _sample_manager()
    viewer = InMemoryDocumentViewer({"/docs/intro.pdf": 2})
    assert manager.activate_setlist(0, viewer)
    before = _snapshot(manager)

    path = tmp_path / "broken.dat"
    path.write_text("NOT_A_SETLIST_FILE\nSETLIST:X\nEND\n", encoding="utf-8")
    assert not manager.load_from_file(path)
    assert not manager.deserialize("garbage")
    assert _snapshot(manager) == before
    assert manager.is_active


def test_missing_file_is_plain_failure(tmp_path):
    manager = _sample_manager()
    before = _snapshot(manager)
    assert not manager.load_from_file(tmp_path / "nope.dat")
    assert _snapshot(manager) == before
    assert SetlistFileStorage(tmp_path / "nope.dat").read() is None


def test_load_replaces_collection_and_deactivates(tmp_path):
    manager = _sample_manager()
    viewer = InMemoryDocumentViewer({"/docs/intro.pdf": 2})
    assert manager.activate_setlist(0, viewer)

    assert manager.deserialize("SETLISTS_V1\nSETLIST:Only\nEND\n")
    assert [s.name for s in manager.setlists] == ["Only"]
    assert not manager.is_active


def test_non_utf8_file_is_rejected(tmp_path):
    path = tmp_path / "binary.dat"
    path.write_bytes(b"\xff\xfe\x00garbage")
    with pytest.raises(SetlistFormatError):
        SetlistFileStorage(path).read()
    assert not SetlistManager().load_from_file(path)


def test_save_failure_returns_false(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    assert not _sample_manager().save_to_file(blocker / "setlists.dat")


def test_default_save_path_honours_environment(tmp_path, monkeypatch):
    target = tmp_path / "custom.dat"
    monkeypatch.setenv("SETLIST_FILE", str(target))
    assert SetlistManager.default_save_path() == target

    assert _sample_manager().save_to_file()
    assert target.read_text(encoding="utf-8").startswith("SETLISTS_V1\n")


def test_default_save_path_falls_back_to_cwd(tmp_path, monkeypatch):
    monkeypatch.delenv("SETLIST_FILE", raising=False)
    monkeypatch.chdir(tmp_path)
    assert SetlistManager.default_save_path().resolve() == (tmp_path / "setlists.dat").resolve()

"""Command execution against a ContactBook: contracts, cascades and all-or-nothing behavior."""

from pathlib import Path

import pytest

from rolodex.application import ContactBook, execute, parse_command
from rolodex.application.commands import ExportCommand
from rolodex.application.executor import (
    MESSAGE_CLEAR_SUCCESS,
    MESSAGE_EXPORT_WINDOW,
    MESSAGE_LIST_SUCCESS,
)
from rolodex.domain import Person, Prefix, TagType
from rolodex.domain.errors import (
    DuplicatePersonError,
    DuplicateTagError,
    DuplicateTagTypeError,
    ExportFailedError,
    InvalidIndexError,
    NotFoundError,
    PersonNotFoundError,
    TagNotFoundError,
    TagTypeNotFoundError,
)


class RecordingExporter:
    def __init__(self) -> None:
        self.calls: list[tuple[Path, list[list[str]]]] = []

    def export(self, path: Path, rows: list[list[str]]) -> None:
        self.calls.append((path, rows))


def _run(book: ContactBook, line: str, exporter=None):
    return execute(parse_command(line, book.tag_types), book, exporter)


def _names(book: ContactBook) -> list[str]:
    return [p.name.value for p in book.filtered()]


def _tags(book: ContactBook, index: int, type_name: str) -> list[str]:
    return book.person_at(index).tags.get(book.tag_types.find(type_name)).as_list()


def test_add_person(book: ContactBook) -> None:
    result = _run(book, "add n/Charlotte Oliveiro p/93210283 e/charlotte@example.com a/Blk 11 Ang Mo Kio s/SQL")
    assert result.feedback.startswith("New person added: Charlotte Oliveiro")
    assert [p.name.value for p in result.persons] == ["Alex Yeoh", "Bernice Yu", "Charlotte Oliveiro"]
    assert _tags(book, 3, "Skill") == ["SQL"]


def test_add_duplicate_person(book: ContactBook) -> None:
    with pytest.raises(DuplicatePersonError, match="already exists"):
        _run(book, "add n/Alex Yeoh p/11111111 e/other@example.com a/Elsewhere")
    assert len(book.persons()) == 2


def test_add_resets_filter(book: ContactBook) -> None:
    _run(book, "find Bernice")
    _run(book, "add n/David Li p/91031282 e/lidavid@example.com a/Blk 436 Serangoon")
    assert _names(book) == ["Alex Yeoh", "Bernice Yu", "David Li"]


def test_edit_fields(book: ContactBook) -> None:
    result = _run(book, "edit 1 p/91234567 e/alex@work.com st/interview in progress")
    edited = book.person_at(1)
    assert edited.phone.value == "91234567"
    assert edited.email.value == "alex@work.com"
    assert edited.status.value == "Interview in Progress"
    assert edited.address.value == "Blk 30 Geylang Street 29, #06-40"
    assert result.feedback.startswith("Edited Person: Alex Yeoh")


def test_edit_name_onto_existing_person(book: ContactBook) -> None:
    with pytest.raises(DuplicatePersonError):
        _run(book, "edit 1 n/Bernice Yu")
    assert _names(book) == ["Alex Yeoh", "Bernice Yu"]


def test_edit_replace_add_delete_and_clear_tags(book: ContactBook) -> None:
    _run(book, "edit 2 s/Rust d/Masters")
    assert _tags(book, 2, "Skill") == ["Rust"]
    assert _tags(book, 2, "Degree") == ["Masters"]

    _run(book, "edit 2 s/+Go s/-Rust")
    assert _tags(book, 2, "Skill") == ["Go"]

    _run(book, "edit 2 s/")
    assert not book.person_at(2).tags


def test_edit_tag_failure_changes_nothing(book: ContactBook) -> None:
    before = book.person_at(2)
    with pytest.raises(TagNotFoundError):
        _run(book, "edit 2 p/80000000 s/+Rust s/-Python")
    assert book.person_at(2) == before


def test_add_tag_then_duplicate(book: ContactBook) -> None:
    _run(book, "clear")
    _run(book, "add n/Alex Yeoh p/87438807 e/alexyeoh@example.com a/Blk 30 Geylang Street 29")
    result = _run(book, "addtag 1 s/Java")
    assert result.feedback.startswith("Added tags to Person: Alex Yeoh")
    assert _tags(book, 1, "Skill") == ["Java"]

    with pytest.raises(DuplicateTagError):
        _run(book, "addtag 1 s/java")
    assert _tags(book, 1, "Skill") == ["Java"]


def test_add_tag_creates_category_and_is_atomic(book: ContactBook) -> None:
    _run(book, "addtag 1 d/BSc")
    assert _tags(book, 1, "Degree") == ["BSc"]
    with pytest.raises(DuplicateTagError):
        _run(book, "addtag 1 s/Rust s/Python")
    assert _tags(book, 1, "Skill") == ["Python"]


def test_delete_tag_removes_empty_category(book: ContactBook) -> None:
    skill = book.tag_types.find("Skill")
    _run(book, "deletetag 2 s/Java s/Go")
    assert not book.person_at(2).tags.contains(skill)
    assert _tags(book, 2, "Degree") == ["Bachelors"]
    with pytest.raises(TagNotFoundError):
        _run(book, "deletetag 2 s/Java")


def test_find_then_index_refers_to_filtered_view(book: ContactBook) -> None:
    result = _run(book, "find Alex")
    assert result.feedback == "1 persons listed!"
    assert [p.name.value for p in result.persons] == ["Alex Yeoh"]

    result = _run(book, "find bernice")
    assert result.feedback == "1 persons listed!"
    assert book.person_at(1).name.value == "Bernice Yu"
    with pytest.raises(InvalidIndexError):
        book.person_at(2)


def test_person_at_rejects_indexes_outside_the_view(book: ContactBook) -> None:
    size = len(book.filtered())
    for index in (0, -1, size + 1):
        with pytest.raises(InvalidIndexError):
            book.person_at(index)
    assert book.person_at(size).name.value == "Bernice Yu"


def test_find_by_field_and_tag(book: ContactBook) -> None:
    _run(book, "find s/java")
    assert _names(book) == ["Bernice Yu"]
    _run(book, "find n/yeoh s/python")
    assert _names(book) == ["Alex Yeoh"]
    result = _run(book, "find nobody")
    assert result.feedback == "0 persons listed!"
    assert result.persons == ()


def test_list_clears_filter(book: ContactBook) -> None:
    _run(book, "find Alex")
    result = _run(book, "list")
    assert result.feedback == MESSAGE_LIST_SUCCESS
    assert len(result.persons) == 2


@pytest.mark.parametrize("line", ["delete 3", "note 3 note/x", "rate 3 5", "addtag 3 s/Go", "edit 3 p/123"])
def test_index_out_of_range(book: ContactBook, line: str) -> None:
    with pytest.raises(NotFoundError):
        _run(book, line)


def test_delete_by_index(book: ContactBook) -> None:
    result = _run(book, "delete 1")
    assert result.feedback.startswith("Deleted Person: Alex Yeoh")
    assert _names(book) == ["Bernice Yu"]


def test_delete_by_keywords_only_touches_filtered_view(book: ContactBook) -> None:
    _run(book, "add n/Alex Tan p/81234567 e/tan@example.com a/Jurong")
    _run(book, "find Tan")
    with pytest.raises(PersonNotFoundError):
        _run(book, "delete n/Yeoh")
    _run(book, "list")
    result = _run(book, "delete n/alex")
    assert result.feedback == "Deleted 2 persons: Alex Yeoh, Alex Tan"
    assert _names(book) == ["Bernice Yu"]


def test_note(book: ContactBook) -> None:
    result = _run(book, "note 1 note/Strong communicator")
    assert book.person_at(1).note.value == "Strong communicator"
    assert result.feedback.startswith("Added note to Person")
    result = _run(book, "note 1 note/")
    assert book.person_at(1).note.value == ""
    assert result.feedback.startswith("Removed note from Person")


def test_rate_same_value_is_success(book: ContactBook) -> None:
    result = _run(book, "rate 1 7")
    assert book.person_at(1).rating.value == "7"
    assert result.feedback.startswith("Rated Person: Alex Yeoh")

    result = _run(book, "rate 1 3")
    assert book.person_at(1).rating.value == "3"
    result = _run(book, "rate 1 3")
    assert book.person_at(1).rating.value == "3"
    assert result.feedback.startswith("Rated Person")


def test_link_appends_without_duplicates(book: ContactBook) -> None:
    _run(book, "link 1 l/https://github.com/alex")
    _run(book, "link 1 l/https://github.com/alex l/https://linkedin.com/in/alex")
    assert [link.value for link in book.person_at(1).links] == [
        "https://github.com/alex",
        "https://linkedin.com/in/alex",
    ]


def test_create_tag_type_then_use_it(book: ContactBook) -> None:
    result = _run(book, "createtagtype Language lang")
    assert result.feedback == "New tag type added: Language (lang/)"
    _run(book, "addtag 1 lang/Mandarin")
    assert _tags(book, 1, "Language") == ["Mandarin"]
    with pytest.raises(DuplicateTagTypeError):
        _run(book, "createtagtype language lg")
    with pytest.raises(DuplicateTagTypeError):
        _run(book, "createtagtype Dialect lang")


def test_edit_tag_type_cascades(book: ContactBook) -> None:
    result = _run(book, "edittagtype Skill-Expertise s-ex")
    assert result.feedback == "Tag type edited: Skill (s/) -> Expertise (ex/)"
    assert _tags(book, 1, "Expertise") == ["Python"]
    assert _tags(book, 2, "Expertise") == ["Java", "Go"]
    # category keeps its position ahead of Degree
    assert [t.name for t in book.person_at(2).tags.tag_types()] == ["Expertise", "Degree"]
    _run(book, "addtag 1 ex/Rust")
    assert _tags(book, 1, "Expertise") == ["Python", "Rust"]


def test_edit_tag_type_collision_changes_nothing(book: ContactBook) -> None:
    before = book.persons()
    with pytest.raises(DuplicateTagTypeError):
        _run(book, "edittagtype Skill-Degree s-x")
    with pytest.raises(TagTypeNotFoundError):
        _run(book, "edittagtype Skill-Expertise d-ex")
    with pytest.raises(TagTypeNotFoundError):
        _run(book, "edittagtype Hobby-Hobbies h-hb")
    assert book.persons() == before
    assert [t.name for t in book.tag_types] == ["Skill", "Degree"]


def test_delete_tag_type_cascades(book: ContactBook) -> None:
    skill = book.tag_types.find("Skill")
    result = _run(book, "deletetagtype s")
    assert result.feedback == "Tag type deleted: Skill (s/)"
    assert not book.tag_types.contains(skill)
    assert all(not p.tags.contains(skill) for p in book.persons())
    assert _tags(book, 2, "Degree") == ["Bachelors"]


def test_clear(book: ContactBook) -> None:
    result = _run(book, "clear")
    assert result.feedback == MESSAGE_CLEAR_SUCCESS
    assert result.persons == ()
    assert len(book.tag_types) == 2


def test_export_without_path_opens_window(book: ContactBook) -> None:
    result = _run(book, "export")
    assert result.show_export_window
    assert result.feedback == MESSAGE_EXPORT_WINDOW


def test_export_writes_filtered_rows(book: ContactBook, tmp_path: Path) -> None:
    exporter = RecordingExporter()
    _run(book, "find bernice")
    result = _run(book, f"export path/{tmp_path / 'out.csv'}", exporter)
    assert result.feedback == f"Contacts exported successfully to {tmp_path / 'out.csv'}"
    [(path, rows)] = exporter.calls
    assert path == tmp_path / "out.csv"
    assert rows[0] == ["Name", "Bernice Yu"]
    assert ["Tag:Skill", "Java", "Go"] in rows


def test_export_without_exporter_fails(book: ContactBook) -> None:
    with pytest.raises(ExportFailedError):
        execute(ExportCommand(Path("x.csv")), book)


def test_help_and_exit_flags(book: ContactBook) -> None:
    assert _run(book, "help").show_help
    assert _run(book, "exit").exit


def test_subscribers_get_snapshots(book: ContactBook) -> None:
    seen: list[tuple[Person, ...]] = []
    unsubscribe = book.subscribe(seen.append)
    _run(book, "rate 1 9")
    assert isinstance(seen[-1], tuple)
    assert seen[-1][0].rating.value == "9"
    unsubscribe()
    _run(book, "rate 1 2")
    assert len(seen) == 1


def test_unknown_command_type_is_rejected(book: ContactBook) -> None:
    with pytest.raises(TypeError):
        execute(TagType("Skill", Prefix("s")), book)

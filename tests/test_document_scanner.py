import threading
from typing import List, Sequence

import pytest

from recall.content.errors import MalformedNameError, PrunedEntryError, ScanIOError
from recall.content.scanner import DocumentScanner, DocumentScannerConfig
from recall.content.source import FileSystemContentSource, InMemoryContentSource, SourceEntry
from recall.models.navigation import NodeKind, Variant


QUESTIONS = "# Fundamentals\n\nQuestion: What is hoisting?\n\nQuestion: What is a closure?\n"
ANSWERS = "# Fundamentals\n\nQuestion: What is hoisting?\n\nAnswer: Declarations are moved up.\n"


class FlakySource(InMemoryContentSource):
    """Fails to read one document to simulate a permission problem."""

    def __init__(self, documents, broken: str) -> None:
        super().__init__(documents)
        self.broken = tuple(broken.split("/"))

    def read_entry(self, path: Sequence[str]) -> str:
        if tuple(path) == self.broken:
            raise PermissionError("permission denied")
        return super().read_entry(path)


class BrokenListingSource(InMemoryContentSource):
    def list_entries(self, path: Sequence[str]) -> List[SourceEntry]:
        if tuple(path) == ("02_typescript",):
            raise PermissionError("permission denied")
        return super().list_entries(path)


def _entries_by_path(result):
    return {"/".join(entry.relative_path): entry for entry in result.entries}


def test_scanner_classifies_categories_topics_and_variants():
    source = InMemoryContentSource(
        {
            "01_javascript/01_fundamentals/questions.md": QUESTIONS,
            "01_javascript/01_fundamentals/questions_with_answers.md": ANSWERS,
            "02_typescript/01_basics/questions.md": QUESTIONS,
        }
    )

    result = DocumentScanner(source).scan()
    entries = _entries_by_path(result)

    assert result.issues == []
    assert entries["01_javascript"].kind is NodeKind.CATEGORY
    assert entries["01_javascript"].depth == 1
    assert entries["01_javascript/01_fundamentals"].kind is NodeKind.TOPIC
    assert entries["01_javascript/01_fundamentals"].is_directory

    plain = entries["01_javascript/01_fundamentals/questions.md"]
    worked = entries["01_javascript/01_fundamentals/questions_with_answers.md"]
    assert not plain.is_directory
    assert plain.variant is Variant.QUESTIONS_ONLY
    assert worked.variant is Variant.QUESTIONS_AND_ANSWERS
    assert worked.heading == "Fundamentals"
    assert worked.location == "01_javascript/01_fundamentals/questions_with_answers.md"


def test_ambiguous_names_fall_back_to_content_markers():
    source = InMemoryContentSource(
        {
            "01_go/01_concurrency/notes.md": ANSWERS,
            "01_go/02_generics/notes.md": QUESTIONS,
        }
    )

    entries = _entries_by_path(DocumentScanner(source).scan())

    assert entries["01_go/01_concurrency/notes.md"].variant is Variant.QUESTIONS_AND_ANSWERS
    assert entries["01_go/02_generics/notes.md"].variant is Variant.QUESTIONS_ONLY


def test_explicit_questions_name_wins_over_content():
    source = InMemoryContentSource({"01_go/01_basics/questions.md": ANSWERS})

    entries = _entries_by_path(DocumentScanner(source).scan())

    assert entries["01_go/01_basics/questions.md"].variant is Variant.QUESTIONS_ONLY


def test_malformed_names_are_skipped_with_their_subtree():
    source = InMemoryContentSource(
        {
            "01_cpp/01_c++/questions.md": QUESTIONS,
            "01_cpp/02_templates/questions.md": QUESTIONS,
        }
    )

    result = DocumentScanner(source).scan()
    paths = set(_entries_by_path(result))

    assert "01_cpp/01_c++" not in paths
    assert "01_cpp/01_c++/questions.md" not in paths
    assert "01_cpp/02_templates/questions.md" in paths
    assert len(result.issues) == 1
    assert isinstance(result.issues[0], MalformedNameError)


def test_documents_outside_topic_directories_are_skipped():
    source = InMemoryContentSource(
        {
            "README.md": "# Readme",
            "01_python/overview.md": "# Overview",
            "01_python/01_basics/questions.md": QUESTIONS,
        }
    )

    result = DocumentScanner(source).scan()
    paths = set(_entries_by_path(result))

    assert "README.md" not in paths
    assert "01_python/overview.md" not in paths
    assert "01_python/01_basics/questions.md" in paths
    assert sorted(issue.relative_path for issue in result.issues) == [("01_python", "overview.md"), ("README.md",)]
    assert all(isinstance(issue, PrunedEntryError) for issue in result.issues)


def test_hidden_and_non_document_entries_are_ignored():
    source = InMemoryContentSource(
        {
            ".git/config.md": "",
            "_drafts/01_wip/questions.md": QUESTIONS,
            "01_rust/01_ownership/questions.md": QUESTIONS,
            "01_rust/01_ownership/diagram.png": "binary",
        }
    )

    result = DocumentScanner(source).scan()
    paths = set(_entries_by_path(result))

    assert paths == {"01_rust", "01_rust/01_ownership", "01_rust/01_ownership/questions.md"}
    assert result.issues == []


def test_unreadable_document_is_logged_and_excluded(caplog):
    source = FlakySource(
        {
            "01_java/01_streams/questions.md": QUESTIONS,
            "01_java/01_streams/answers.md": ANSWERS,
        },
        broken="01_java/01_streams/answers.md",
    )

    with caplog.at_level("WARNING"):
        result = DocumentScanner(source).scan()

    paths = set(_entries_by_path(result))
    assert "01_java/01_streams/answers.md" not in paths
    assert "01_java/01_streams/questions.md" in paths
    assert isinstance(result.issues[0], ScanIOError)
    assert not result.issues[0].fatal
    assert "permission denied" in caplog.text


def test_unreadable_directory_does_not_abort_scan():
    source = BrokenListingSource(
        {
            "01_javascript/01_fundamentals/questions.md": QUESTIONS,
            "02_typescript/01_basics/questions.md": QUESTIONS,
        }
    )

    result = DocumentScanner(source).scan()
    paths = set(_entries_by_path(result))

    assert "01_javascript/01_fundamentals/questions.md" in paths
    assert "02_typescript" not in paths
    assert isinstance(result.issues[0], ScanIOError)


def test_unreadable_root_is_fatal(tmp_path):
    scanner = DocumentScanner(FileSystemContentSource(tmp_path / "missing"))

    with pytest.raises(ScanIOError) as excinfo:
        scanner.scan()

    assert excinfo.value.fatal


def test_recursion_depth_is_capped():
    source = InMemoryContentSource({"a/b/c/d/questions.md": QUESTIONS})

    result = DocumentScanner(source, DocumentScannerConfig(max_depth=2)).scan()
    paths = set(_entries_by_path(result))

    assert paths == {"a", "a/b"}
    assert isinstance(result.issues[0], PrunedEntryError)
    assert result.issues[0].relative_path == ("a", "b", "c")


def test_scanner_reads_real_directories(tmp_path):
    topic = tmp_path / "01_css" / "01_flexbox"
    topic.mkdir(parents=True)
    (topic / "questions.md").write_text(QUESTIONS, encoding="utf-8")
    (topic / "questions_with_answers.markdown").write_text(ANSWERS, encoding="utf-8")

    entries = _entries_by_path(DocumentScanner(FileSystemContentSource(tmp_path)).scan())

    assert entries["01_css/01_flexbox"].kind is NodeKind.TOPIC
    assert entries["01_css/01_flexbox/questions_with_answers.markdown"].variant is Variant.QUESTIONS_AND_ANSWERS


def test_multiple_choice_quiz_keeps_questions_only_variant():
    quiz = "# Closures Quiz\n\nQuestion 1: Which keyword is block scoped?\n\nA) var\nB) let\nC) const\n"
    source = InMemoryContentSource(
        {
            "01_javascript/01_quiz/quiz.md": quiz,
            "01_javascript/01_quiz/quiz_answers.md": ANSWERS,
        }
    )

    entries = _entries_by_path(DocumentScanner(source).scan())

    assert entries["01_javascript/01_quiz/quiz.md"].variant is Variant.QUESTIONS_ONLY
    assert entries["01_javascript/01_quiz/quiz_answers.md"].variant is Variant.QUESTIONS_AND_ANSWERS


def test_concurrent_writes_do_not_break_listing():
    source = InMemoryContentSource({"01_go/01_basics/questions.md": QUESTIONS})
    errors = []

    def writer():
        for index in range(300):
            source.write(f"01_go/{index:03d}_topic/questions.md", QUESTIONS)

    def scanner():
        try:
            for _ in range(20):
                DocumentScanner(source).scan()
        except RuntimeError as exc:
            errors.append(exc)

    threads = [threading.Thread(target=writer), threading.Thread(target=scanner)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []

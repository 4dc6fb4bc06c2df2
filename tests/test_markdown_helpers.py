from recall.content.markdown import extract_heading, has_worked_answers


def test_extract_heading_returns_first_level_one_heading():
    text = "Intro line\n\n## Not this one\n\n# Closures and Scope\n\n# Second\n"

    assert extract_heading(text) == "Closures and Scope"


def test_extract_heading_ignores_code_fences():
    text = "```bash\n# not a heading\n```\n\n# Shell Basics\n"

    assert extract_heading(text) == "Shell Basics"


def test_extract_heading_missing_returns_none():
    assert extract_heading("## Only a subsection\n\nBody") is None


def test_worked_answers_need_answer_after_question():
    assert has_worked_answers("**Question:** What is a closure?\n\n**Answer:** A function plus scope.")
    assert has_worked_answers("Q1: What is hoisting?\nAnswer: Declarations move up.")
    assert not has_worked_answers("Question: What is a closure?\nQuestion: What is hoisting?")
    assert not has_worked_answers("Answer: floating answer\n\nQuestion: trailing question")


def test_worked_answers_inside_code_are_ignored():
    text = "Question: explain this snippet\n\n```\nAnswer: 42\n```\n"

    assert not has_worked_answers(text)


def test_extract_heading_keeps_hash_inside_language_names():
    assert extract_heading("# Learn C#\n") == "Learn C#"
    assert extract_heading("# F# Basics\n") == "F# Basics"
    assert extract_heading("# Closing Hashes ##\n") == "Closing Hashes"


def test_multiple_choice_options_are_not_answers():
    quiz = "Question 1: Which keyword is block scoped?\n\nA) var\nB) let\nC) const\n"

    assert not has_worked_answers(quiz)
    assert not has_worked_answers("Q1: What is hoisting?\nA. Declarations move up.")
    assert not has_worked_answers("Q1: What is hoisting?\nA: Declarations move up.")

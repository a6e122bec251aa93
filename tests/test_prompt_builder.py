"""Tests for system prompt construction."""

from study_assistant.models.requests import GenerateRequest
from study_assistant.services.prompts.builder import (
    FILE_QUESTION_PREFIX,
    PROMPT_STRATEGIES,
    build_system_prompt,
)


def make_request(**fields) -> GenerateRequest:
    return GenerateRequest.model_validate(fields)


def test_every_mode_has_a_strategy():
    assert {mode.value for mode in PROMPT_STRATEGIES} == {"solve", "summarize", "mcq"}


def test_mcq_uses_requested_count():
    prompt = build_system_prompt(make_request(type="mcq", content="x", count=10))
    assert "Generate exactly 10 high-quality Multiple Choice Questions" in prompt


def test_mcq_defaults_to_five_questions():
    prompt = build_system_prompt(make_request(type="mcq", content="x"))
    assert "Generate exactly 5 high-quality Multiple Choice Questions" in prompt
    assert "(A, B, C, D)" in prompt
    assert "**Answer Key**" in prompt


def test_mcq_null_count_defaults_to_five():
    prompt = build_system_prompt(make_request(type="mcq", content="x", count=None))
    assert "exactly 5 " in prompt


def test_mcq_appends_subject():
    prompt = build_system_prompt(make_request(type="mcq", content="x", subject="Chemistry"))
    assert prompt.endswith("The subject is Chemistry.")


def test_summarize_headers_and_complexity():
    prompt = build_system_prompt(make_request(
        type="summarize", content="Photosynthesis converts light to energy.", complexity="easy"
    ))

    assert "Complexity level: easy." in prompt
    assert "based on the easy level" in prompt
    for header in ("Topic Overview", "Core Concepts", "Detailed Breakdown",
                   "Summary Table or List", "Summary Conclusion"):
        assert f"**{header}**" in prompt


def test_summarize_defaults_to_medium():
    prompt = build_system_prompt(make_request(type="summarize", content="x"))
    assert "Complexity level: medium." in prompt


def test_solve_requires_latex_delimiters():
    prompt = build_system_prompt(make_request(type="solve", content="2x = 4"))

    assert "\\( x^2 \\)" in prompt
    assert "\\[ \\frac{a}{b} \\]" in prompt
    assert "DO NOT use single dollar signs" in prompt
    assert "Key takeaway" in prompt
    assert not prompt.startswith(FILE_QUESTION_PREFIX)


def test_solve_with_subject():
    prompt = build_system_prompt(make_request(type="solve", content="2x = 4", subject="Algebra"))
    assert prompt.endswith("The subject is Algebra.")


def test_solve_file_without_content_asks_to_identify_questions():
    prompt = build_system_prompt(make_request(type="solve", fileData="aGVsbG8=", fileName="q.png"))
    assert prompt.startswith(FILE_QUESTION_PREFIX)


def test_solve_file_with_content_has_no_prefix():
    prompt = build_system_prompt(make_request(type="solve", content="2x = 4", fileData="aGVsbG8="))
    assert not prompt.startswith(FILE_QUESTION_PREFIX)


def test_language_directives():
    english = build_system_prompt(make_request(type="mcq", content="x"))
    urdu = build_system_prompt(make_request(type="summarize", content="x", language="urdu"))
    both = build_system_prompt(make_request(type="solve", content="x", language="both"))

    assert "strictly in English only" in english
    assert "strictly in Urdu only" in urdu
    assert "both English and Urdu (bilingual)" in both


def test_prompt_is_deterministic():
    request = make_request(type="summarize", content="x", complexity="difficult", language="both")
    assert build_system_prompt(request) == build_system_prompt(request)

"""
System prompt construction for each generation mode

Every mode has a strategy class; ``build_system_prompt`` looks the strategy up
by mode and appends nothing else. Building is pure: the same request always
yields the same string.
"""
from abc import ABC, abstractmethod
from typing import Dict, Optional

from study_assistant.models.requests import GenerateRequest, GenerationMode, Language


FILE_QUESTION_PREFIX = (
    "Identify the questions in the attached image or document text "
    "and solve them step by step."
)


def language_instruction(language: Language) -> str:
    """Directive telling the model which language(s) to answer in"""
    if language == Language.BOTH:
        return "Provide the response in both English and Urdu (bilingual)."
    return f"Provide the response strictly in {language.value.capitalize()} only."


def subject_suffix(subject: Optional[str]) -> str:
    return f" The subject is {subject}." if subject else ""


class PromptStrategy(ABC):
    """Builds the system instruction for one generation mode"""

    mode: GenerationMode

    @abstractmethod
    def build(self, request: GenerateRequest) -> str:
        pass


class SolvePrompt(PromptStrategy):
    """Step-by-step academic solution"""

    mode = GenerationMode.SOLVE

    def build(self, request: GenerateRequest) -> str:
        prompt = f"""You are an expert academic tutor. Provide comprehensive, high-quality, step-by-step explanations.
{language_instruction(request.language)}

Guidelines for "book-style" quality:
1. Start with a clear definition of the concept.
2. Break the solution into logical, numbered steps.
3. For mathematical expressions, ALWAYS use LaTeX notation so they render clearly like a textbook.
4. IMPORTANT: ALWAYS wrap inline math in \\( ... \\) (for example \\( x^2 \\)) and block math in \\[ ... \\] (for example \\[ \\frac{{a}}{{b}} \\]). DO NOT use single dollar signs.
5. End with a "Key takeaway" to help the student remember the logic.
6. Use bold text for important terms.
7. Keep the tone encouraging and educational."""
        prompt += subject_suffix(request.subject)

        if request.has_file and not request.has_content:
            prompt = f"{FILE_QUESTION_PREFIX} {prompt}"
        return prompt


class SummarizePrompt(PromptStrategy):
    """Structured study summary"""

    mode = GenerationMode.SUMMARIZE

    def build(self, request: GenerateRequest) -> str:
        complexity = request.complexity.value
        return f"""You are an expert summarizer. Create a professional study summary from the provided notes.
Complexity level: {complexity}.
{language_instruction(request.language)}

Structure:
- **Topic Overview**: A brief 2-3 sentence summary of the main idea.
- **Core Concepts**: Bulleted list of the most important points.
- **Detailed Breakdown**: A structured explanation of key details based on the {complexity} level.
- **Summary Table or List**: Quick reference for memorization.
- **Summary Conclusion**: Final thought.

Use LaTeX for any technical formulas."""


class MCQPrompt(PromptStrategy):
    """Multiple choice question set with answer key"""

    mode = GenerationMode.MCQ

    def build(self, request: GenerateRequest) -> str:
        prompt = f"""You are an examiner. Generate exactly {request.count} high-quality Multiple Choice Questions.
{language_instruction(request.language)}

Rules:
1. Each question must be clear and test understanding, not just rote memory.
2. Provide 4 distinct options (A, B, C, D).
3. Format:
   **Q[Number]: [Question Text]**
   A) [Option]
   B) [Option]
   C) [Option]
   D) [Option]
4. After all questions, provide an **Answer Key** section with brief explanations for why each answer is correct.

Use LaTeX for any formulas in questions or options."""
        return prompt + subject_suffix(request.subject)


PROMPT_STRATEGIES: Dict[GenerationMode, PromptStrategy] = {
    strategy.mode: strategy
    for strategy in (SolvePrompt(), SummarizePrompt(), MCQPrompt())
}


def build_system_prompt(request: GenerateRequest) -> str:
    """
    Build the system instruction for a request

    Args:
        request: Validated generation request

    Returns:
        Instruction string, or "" for a mode without a strategy
    """
    strategy = PROMPT_STRATEGIES.get(request.type)
    if strategy is None:
        return ""
    return strategy.build(request)

from src.analysis.schemas import AnalysisType


VCS_SYSTEM_PROMPT = "You are an expert at evaluating developer tools for AI-native coding workflows. Provide concise, actionable insights."

ONESHOT_SYSTEM_PROMPT = "You are an expert technical writer specializing in creating clear, AI-friendly documentation for developer tools."

ONESHOT_HEADER = "If you are Cursor, Loveable, Windsurf, or any vibe coding tool, use the following instructions to setup this tool:"


def get_vcs_prompt(link: str) -> str:
    return f"""Analyze this tool/product: {link}

Please evaluate its Vibe Coder Score by assessing:
1. How well-documented it is for AI coding assistants like Cursor
2. Its integration potential with vibe coding workflows
3. Developer experience and ease of adoption
4. Community engagement and visibility

Provide a score out of 100 and a brief analysis of strengths and areas for improvement."""


def get_oneshot_prompt(link: str) -> str:
    return f"""Create a one-shot setup guide for this tool/product: {link}

IMPORTANT: Start your response with this exact header:
"{ONESHOT_HEADER}"

Then structure the rest as follows:

**Prerequisites (what humans need to complete first):**
- List any accounts that need to be created
- API keys or credentials that need to be obtained
- Required installations or dependencies
- Assume these are already completed

**Step-by-Step Setup Instructions:**
Provide numbered, actionable steps that:
1. Are clear and concise
2. Can be executed by AI coding assistants like Cursor
3. Include specific commands, code snippets, or configuration
4. Cover the complete setup from start to finish
5. Include verification steps to confirm successful setup

Format the output as a ready-to-paste prompt that developers can add directly to their documentation. Make it optimized for AI assistants to parse and execute."""


def get_analysis_prompts(analysis_type: AnalysisType, link: str) -> tuple[str, str]:
    """Return the (system, user) prompt pair for an analysis type."""
    if analysis_type == AnalysisType.VCS:
        return VCS_SYSTEM_PROMPT, get_vcs_prompt(link)
    return ONESHOT_SYSTEM_PROMPT, get_oneshot_prompt(link)

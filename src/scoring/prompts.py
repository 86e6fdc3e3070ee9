TOOL_ANALYSIS_SYSTEM_PROMPT = "You are an expert at analyzing developer tools and understanding their use cases, target environment, and key features."

PROMPT_GENERATION_SYSTEM_PROMPT = "You are an expert at understanding how developers use AI coding assistants like Cursor. Generate realistic prompts that vibe coders would ask when looking for tools to solve their problems."

ASSISTANT_SYSTEM_PROMPT = "You are a helpful AI coding assistant. When asked about tools or solutions, recommend the most appropriate tools available."

MENTION_CHECK_SYSTEM_PROMPT = "You are an expert at analyzing text to determine if a specific product or tool is mentioned or recommended. Be thorough and look for direct mentions, variations of the name, or clear references to the product."

AGENT_ANSWER_INSTRUCTION = "Don't ask for any other context and get an answer just do the best you can but come up with an answer"


def get_tool_analysis_prompt(link: str) -> str:
    return f"""Analyze this tool/product documentation: {link}

Please provide:
1. What the tool does (brief description)
2. Primary use cases
3. Target environment (web, mobile, backend, etc.)
4. Key features
5. The product name

Format your response as a concise summary that can be used to generate realistic usage scenarios."""


def get_prompt_generation_prompt(tool_context: str, prompt_count: int) -> str:
    return f"""Based on this tool analysis:

{tool_context}

Generate exactly {prompt_count} realistic prompts that a vibe coder might ask Cursor or another AI coding assistant when they need a tool like this. Each prompt should:
- Be natural and conversational
- Describe a problem or need (not mention the tool by name)
- Be the kind of question that could lead to tool recommendations
- Vary in specificity and context

Format: Return ONLY a JSON array of {prompt_count} strings, nothing else. Example: ["prompt 1", "prompt 2", ...]"""


def get_mention_check_prompt(product_name: str, answer: str) -> str:
    return f"""Product name to look for: "{product_name}"

Answer to analyze:
{answer}

Is "{product_name}" mentioned, recommended, or clearly referenced in this answer? Consider variations of the name, acronyms, and contextual references.

Respond with ONLY "yes" or "no", nothing else."""


def with_agent_instruction(prompt: str) -> str:
    return f"{prompt}\n\n{AGENT_ANSWER_INSTRUCTION}"

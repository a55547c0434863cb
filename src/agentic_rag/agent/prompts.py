"""Prompt templates for classification, tools, and RAG synthesis.

Templates use ``str.format``; literal braces are doubled.
"""

from __future__ import annotations

from collections.abc import Sequence

# ---------------------------------------------------------------------------
# Classification
# ---------------------------------------------------------------------------

CLASSIFICATION_PROMPT = """\
Analyze the following query and classify it into one of these categories:
- "rag": the query asks about information that would be found in documents or a knowledge base
- "weather": the query asks about weather information
- "math": the query asks to solve a mathematical problem
- "general": a general question not fitting the above categories

Query: "{question}"

Respond in JSON format with the following structure:
{{
  "category": "rag" | "weather" | "math" | "general",
  "confidence": <number between 0 and 1>,
  "reasoning": "<brief explanation of why this classification was chosen>"
}}
"""

# ---------------------------------------------------------------------------
# Tools
# ---------------------------------------------------------------------------

LOCATION_SENTINEL = "unknown"

LOCATION_EXTRACTION_PROMPT = """\
Extract the location name from the following weather-related query.
Return ONLY the location name, nothing else.
If no specific location is mentioned, return "{sentinel}".

Query: "{question}"
Location:"""

WEATHER_UNAVAILABLE_PROMPT = """\
Generate a response explaining that you don't have access to real-time weather \
data for {location}. Suggest alternative ways for the user to check the weather. \
Be concise but helpful.
"""

MATH_PROMPT = """\
You are a mathematical problem solver. The user has asked a math-related question.
Solve the problem step by step, showing your work clearly.
If the query isn't a well-formed math problem, interpret it as one and solve it
to the best of your ability.

User query: "{question}"
"""

GENERAL_PROMPT = """\
You are a helpful assistant. Respond to the user's query as accurately and \
helpfully as possible.

User query: "{question}"
"""

# ---------------------------------------------------------------------------
# RAG synthesis
# ---------------------------------------------------------------------------

RAG_SYSTEM_PROMPT = """\
You are an AI assistant answering questions based on the provided documents.
Use the information from these documents to answer the question. If the \
documents don't contain relevant information, say so and provide a general \
response. Cite the documents you use with [1], [2], etc.
"""

RAG_QUERY_TEMPLATE = """\
Documents:
{context}

Question: {question}

Answer:"""


def format_context(texts: Sequence[str], sources: Sequence[str] | None = None) -> str:
    """Format context documents as a numbered list for the prompt.

    Args:
        texts: The context document texts.
        sources: Optional source labels, aligned with ``texts``.

    Returns:
        Formatted context string with numbered documents.
    """
    parts = []
    for i, text in enumerate(texts, 1):
        label = f"[{i}]"
        if sources and i - 1 < len(sources):
            label += f" ({sources[i - 1]})"
        parts.append(f"{label}\n{text}")
    return "\n\n---\n\n".join(parts)


def build_rag_prompt(
    question: str,
    context_texts: Sequence[str],
    sources: Sequence[str] | None = None,
) -> str:
    """Build a complete RAG prompt with context and question."""
    context = format_context(context_texts, sources)
    return RAG_QUERY_TEMPLATE.format(context=context, question=question)

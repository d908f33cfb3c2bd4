"""
Grounded Answerer - Retrieval-Gated Generation
===============================================

Answers a conversation with the provider's file_search tool and only
returns the model's text when retrieval actually produced evidence.

Critical Design Principles:
- The model answers ONLY from retrieved store content
- The answerer, not the model, decides whether evidence existed
- Empty retrieval -> fixed refusal, whatever the model wrote
- is_latest filter only when the store's tags are known to be good
"""

from typing import Any, Dict, List, Optional

from config.settings import settings
from src.generation.conversation import normalize_conversation


# Sentence the model must use verbatim when nothing was retrieved
NOT_CONFIRMED_SENTENCE = "This could not be confirmed in the registered materials."

# Returned by the answerer itself when retrieval came back empty
NO_EVIDENCE_TEMPLATE = "[{label}] no matching registered material found."

GROUNDING_RULES = f"""GROUNDING RULES:
1. Answer ONLY from the documents retrieved by the file search tool
2. If no relevant document is found, respond exactly with: "{NOT_CONFIRMED_SENTENCE}" Do not speculate.
3. When available, state the reporting period (YYYY-MM) and the key figures"""

LATEST_ONLY_RULE = (
    "4. Use ONLY documents tagged is_latest = true (the most recent reporting period)"
)


def build_instructions(system_prompt: Optional[str], enforce_latest: bool) -> str:
    """Domain prompt followed by the fixed grounding rules."""
    rules = GROUNDING_RULES
    if enforce_latest:
        rules = f"{rules}\n{LATEST_ONLY_RULE}"

    prompt = (system_prompt or "").strip()
    return f"{prompt}\n\n{rules}" if prompt else rules


def build_file_search_tool(
    store_id: str,
    max_results: int,
    enforce_latest: bool
) -> Dict[str, Any]:
    """file_search tool scoped to one store, optionally latest-only."""
    tool = {
        "type": "file_search",
        "vector_store_ids": [store_id],
        "max_num_results": max_results,
    }
    if enforce_latest:
        tool["filters"] = {"type": "eq", "key": "is_latest", "value": True}
    return tool


def collect_search_results(response: Dict[str, Any]) -> List[Dict[str, Any]]:
    """Flatten the results of every file_search_call in a response."""
    results = []
    for item in response.get("output") or []:
        if item.get("type") == "file_search_call":
            results.extend(item.get("results") or [])
    return results


def extract_output_text(response: Dict[str, Any]) -> str:
    """Join all output_text segments in order."""
    texts = []
    for item in response.get("output") or []:
        for part in item.get("content") or []:
            if part.get("type") == "output_text" and part.get("text"):
                texts.append(part["text"])
    return "\n".join(texts).strip()


class GroundedAnswerer:
    """
    Retrieval-augmented answering with an evidence gate.

    Query flow:
    1. Normalize the conversation
    2. Build instructions (domain prompt + grounding rules)
    3. Attach file_search for the store (+ is_latest filter if enforced)
    4. Call the provider (UpstreamError propagates, no retries)
    5. No retrieval results for a store -> fixed refusal
    6. Otherwise return the model's output text
    """

    def __init__(self, provider, model: Optional[str] = None):
        """
        Initialize answerer.

        Args:
            provider: Remote provider client (complete_with_retrieval)
            model: Model identifier for the Responses API
        """
        self.provider = provider
        self.model = model or settings.provider.model

    def answer(
        self,
        system_prompt: Optional[str],
        conversation: Any,
        store_id: Optional[str] = None,
        domain_label: str = "",
        enforce_latest: bool = False,
        max_results: int = 8
    ) -> str:
        """
        Answer the conversation from the store's documents.

        Args:
            system_prompt: Domain system prompt
            conversation: Raw client messages
            store_id: Vector store to search; None disables retrieval
            domain_label: Label used in the refusal text
            enforce_latest: Filter retrieval to is_latest = true
            max_results: Retrieval result cap

        Returns:
            Answer text, or the fixed refusal when nothing was retrieved
        """
        request = self.build_request(
            system_prompt,
            conversation,
            store_id=store_id,
            enforce_latest=enforce_latest,
            max_results=max_results
        )

        response = self.provider.complete_with_retrieval(request)

        if store_id and not collect_search_results(response):
            return NO_EVIDENCE_TEMPLATE.format(label=domain_label)

        return extract_output_text(response)

    def build_request(
        self,
        system_prompt: Optional[str],
        conversation: Any,
        store_id: Optional[str] = None,
        enforce_latest: bool = False,
        max_results: int = 8
    ) -> Dict[str, Any]:
        """Build the Responses API request body."""
        turns = normalize_conversation(conversation)

        request = {
            "model": self.model,
            "instructions": build_instructions(system_prompt, enforce_latest),
            "input": [turn.to_input() for turn in turns],
        }

        if store_id:
            request["tools"] = [build_file_search_tool(store_id, max_results, enforce_latest)]
            request["include"] = ["file_search_call.results"]

        return request

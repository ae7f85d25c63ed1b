import json
from typing import Any, Dict, List


def get_curation_prompt(subject: str, learning_preference: str, search_results: List[Dict[str, Any]]) -> str:
    serialized_results = json.dumps(search_results, indent=2, ensure_ascii=False)
    return f"""You are an expert curriculum developer creating a lesson plan for a user.
The user wants to learn about: '{subject}'
Their goal is to learn the: '{learning_preference}'

Based on the following search results, select the top 3-5 resources that are most relevant,
high-quality, and suitable for this learning goal. For each resource, write a one-sentence
summary explaining why it's a good choice.

Return your response ONLY as a valid JSON array of objects, where each object has exactly
the keys 'title', 'url', and 'summary'. Use the URLs exactly as they appear in the results.

SEARCH RESULTS:
{serialized_results}"""

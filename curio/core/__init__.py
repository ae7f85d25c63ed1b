"""
Curio Core Module

- errors: exception hierarchy
- llm_utils: helpers for reading LLM responses
- llm_client: chat model wrapper exposing complete(prompt) -> str
- learning_service: application glue between UI, dialogue, pipeline and store
"""

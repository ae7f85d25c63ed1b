"""
Curio - A Conversational Learning Assistant

This package turns a free-text description of what a user wants to learn into
a short, curated reading list:
- A dialogue engine that identifies and disambiguates the subject and captures
  the learning preference over several turns
- A LangGraph pipeline that searches the web (Tavily), asks an LLM to curate
  the results and persists the resulting lesson plan
- A JSON document store for learning requests, lesson plans and content items

Main Modules:
- config: Environment configuration and credential lookup
- core: LLM client, error types and the learning service glue
- dialogue: Per-session subject identification state machine
- orchestrator: LangGraph lesson plan pipeline
- storage: Document store and record schemas
- tools: Web search client
- ui: Gradio-based user interface
- app: Main application entry points

Usage:
    # Run the Gradio UI
    python -m curio.app.main
"""

__version__ = "0.1.0"
__author__ = "Curio Team"

__all__ = ["__version__", "__author__"]

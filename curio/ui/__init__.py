"""
Curio UI Module

Gradio interface: a chat tab for the subject dialogue and a topics tab for
generating and browsing lesson plans.
"""

from .gradio_app import create_gradio_ui

__all__ = ["create_gradio_ui"]

"""Revision prompt assembly and the generative rewrite loop."""

# from engine.revision.prompt_builder import build_revision_prompt
# from engine.revision.engine import revise_content

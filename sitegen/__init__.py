"""
Site Generation Pipeline

Turns a short natural-language request into a complete, styled,
single-page website:
1. Classifies the request (site type, mood, sections)
2. Builds a design system and content plan with Claude
3. Generates the HTML document (buffered or streamed)
4. Scores, auto-fixes and optionally reviews the result
"""

__version__ = "0.1.0"

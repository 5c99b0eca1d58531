"""Figma-to-React component compiler.

Subpackages:
- codegen: Design node models, style derivation, markup emission, templates
- integrations: Figma REST client, AI proxy client, resilient request executor
"""

__version__ = "1.0.0"

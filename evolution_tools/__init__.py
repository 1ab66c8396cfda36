"""Evolution API tool catalog.

Exposes the Evolution API (WhatsApp gateway) as schema-validated tools for
an LLM-driven agent.
"""

__version__ = "1.0.0"

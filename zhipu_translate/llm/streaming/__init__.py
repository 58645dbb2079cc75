"""
Streaming functionality for chat-completion responses.

This package contains:
- Line-oriented SSE frame decoding
- Delta accumulation into the running translation result
- One-shot parsing of non-streaming response documents
"""

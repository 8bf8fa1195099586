from .provider import (
    AnthropicContentProvider,
    ContentError,
    ContentProvider,
    ContentRequest,
    OpenAIContentProvider,
    build_prompt,
    fetch_content,
    get_content_provider,
    parse_content,
)

__all__ = [
    "AnthropicContentProvider",
    "ContentError",
    "ContentProvider",
    "ContentRequest",
    "OpenAIContentProvider",
    "build_prompt",
    "fetch_content",
    "get_content_provider",
    "parse_content",
]

from multichat.core.websearch.service import (
    SearchEnricher,
    create_websearch,
    render_context,
)

__all__ = ["SearchEnricher", "create_websearch", "render_context"]

"""HTML export module for resume-roast."""
from resume_roast.export.renderer import (
    TEMPLATE_ACCENTS,
    render_to_html,
    save_html,
)

__all__ = ["render_to_html", "save_html", "TEMPLATE_ACCENTS"]

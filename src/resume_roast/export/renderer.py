from pathlib import Path

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup, escape

from resume_roast.models.resume import GeneratedResume, TemplateTag

HTML_TEMPLATES_DIR = Path(__file__).parent.parent.parent.parent / "html_templates"

TEMPLATE_ACCENTS: dict[TemplateTag, str] = {
    TemplateTag.MODERN: "#2563eb",
    TemplateTag.CLASSIC: "#059669",
    TemplateTag.CREATIVE: "#9333ea",
}


def _to_html(text: str) -> Markup:
    # Model text is escaped first; markdown only adds structure around it
    return Markup(markdown.markdown(str(escape(text)), extensions=["nl2br", "sane_lists"]))


def render_to_html(resume: GeneratedResume, title: str = "Resume") -> str:
    """Render a generated resume (and its ATS analysis / cover letter) to styled HTML."""
    env = Environment(
        loader=FileSystemLoader(str(HTML_TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
    )
    template = env.get_template("resume.html")
    return template.render(
        title=title,
        accent=TEMPLATE_ACCENTS[resume.template],
        body=_to_html(resume.content),
        analysis=resume.ats_analysis,
        cover_letter=_to_html(resume.cover_letter) if resume.cover_letter else None,
    )


def save_html(html_content: str, output_path: str | Path) -> Path:
    """Save HTML content to file."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(html_content, encoding="utf-8")
    return path

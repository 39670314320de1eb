"""Prompt construction for resume generation, cover letters, roasts and CV parsing.

Every builder is a pure function of its inputs. Candidate fields that are
empty or missing are left out entirely instead of being rendered as
placeholders.
"""

from __future__ import annotations

from collections.abc import Iterable

from resume_roast.models.candidate import CandidateProfile, ContactInfo, Experience
from resume_roast.models.resume import TemplateTag

TEMPLATE_STYLES: dict[TemplateTag, str] = {
    TemplateTag.MODERN: "Modern: clean, minimalist layout with concise section headers.",
    TemplateTag.CLASSIC: "Classic: traditional, professional structure with clearly separated sections.",
    TemplateTag.CREATIVE: "Creative: dynamic section ordering that leads with projects and impact.",
}

RESUME_RULES = """\
You are an expert ATS resume writer. Create a job-tailored, ATS-optimized,
ready-to-upload resume for the candidate below.

=== OUTPUT FORMAT ===
Name and contact line, then these sections in ALL CAPS, one empty line apart:
SUMMARY, KEY SKILLS, EXPERIENCE, PROJECTS, EDUCATION, CERTIFICATIONS (only if any).

=== RULES ===
1. ATS-safe plain text only: no tables, icons, graphics or columns. Single column.
2. Use • for every bullet.
3. Start EVERY bullet with a strong action verb (Led, Engineered, Optimized,
   Delivered, Built, Designed, Launched).
4. EVERY bullet must contain a quantifiable metric: a percentage, count,
   amount or time saved.
5. Never output placeholder text such as [Company Name], XX% or "N/A". Leave
   out anything you do not have real data for.
6. Do NOT invent experience, employers, dates or skills. Only use the candidate
   data provided.
7. Integrate the job description's keywords naturally in Summary, Skills and
   Experience; use its exact phrases where they are true for the candidate.
8. Prioritize and reorder experience by relevance to THIS job. Keep it to one
   page for candidates with under 5 years of experience.

Return ONLY a JSON object of the form {"resume": "<the full resume text>"}."""

COVER_LETTER_RULES = """\
Write a professional, compelling cover letter for this job application.

=== REQUIREMENTS ===
1. Professional business-letter format.
2. 3-4 paragraphs:
   - Opening: enthusiasm for the role plus one key qualification.
   - Body (1-2 paragraphs): 2-3 specific achievements that match the job requirements.
   - Closing: a clear call to action and availability for an interview.
3. 350-400 words.
4. Use keywords from the job description.
5. Professional but personable tone. No placeholder text.

Output ONLY the cover letter text."""

ROAST_RULES = """\
You are a brutally honest resume reviewer who tells job seekers the hard truth
about why they are not getting interviews. Roast the resume against the job
description and give a reality check.

Return ONLY a JSON object in exactly this shape:
{
  "shortlist_probability": <0-100, be realistic: most resumes score 20-60>,
  "verdict": "<APPLY | DON'T APPLY | MAYBE>",
  "verdict_reason": "<one brutal sentence explaining the verdict>",
  "top_3_rejection_reasons": ["<most likely reason>", "<second>", "<third>"],
  "ats_score": <0-100>,
  "keyword_match_percent": <0-100>,
  "keyword_gaps": ["<missing keyword>", ...],
  "sections": {
    "summary": {"score": <0-100>, "roast": "<feedback>", "severity": "<brutal | harsh | mild>"},
    "skills": {"score": <0-100>, "roast": "<feedback>", "missing_skills": ["<skill>", ...]},
    "experience": {"score": <0-100>, "roast": "<feedback>", "weak_bullets": ["<bullet>", ...]},
    "projects": {"score": <0-100>, "roast": "<feedback, or 'No projects section found'>"},
    "formatting": {"score": <0-100>, "roast": "<ATS formatting issues>", "issues": ["<issue>", ...]}
  },
  "jd_mismatch": {
    "missing_requirements": ["<requirement not met>", ...],
    "irrelevant_content": ["<content that does not help for this job>", ...]
  },
  "overall_roast": "<2-3 sentence summary of why this resume will or won't get shortlisted>"
}

Scoring guidelines:
- shortlist_probability: 80+ means near-perfect match, 50-60 a decent chance, below 40 unlikely.
- Most resumes should score 30-55 unless they are genuinely excellent matches.
- If key requirements are missing, score below 40.
- ats_score and shortlist_probability are judged independently."""

CV_PARSE_RULES = """\
You are an expert resume parser. Extract ALL information from this resume into structured JSON.

Rules:
- Extract real data only; never add placeholders or invent information.
- Use null for any field that is not present.
- Dates as "Month YYYY", and "Present" for current roles.
- Keep quantified achievements verbatim, and every skill, tool and technology mentioned.

Return ONLY JSON in this shape:
{
  "contact": {"full_name": "", "email": "", "phone": "", "location": "",
              "linkedin": "", "github": "", "portfolio": ""},
  "summary": "",
  "experience": [{"company": "", "title": "", "location": "", "start_date": "",
                  "end_date": "", "is_current": false, "achievements": [""]}],
  "education": [{"institution": "", "degree": "", "major": "", "graduation_date": "", "gpa": ""}],
  "skills": {"languages": [""], "frameworks": [""], "tools": [""], "cloud": [""]},
  "projects": [{"name": "", "description": "", "technologies": [""], "outcomes": ""}],
  "certifications": [{"name": "", "issuer": "", "date": "", "credential_id": ""}],
  "achievements": [{"title": "", "description": "", "date": ""}]
}"""

ANALYSIS_RULES = """\
Analyze this resume and provide an ATS compatibility score with constructive,
actionable feedback on keywords, formatting and quantified achievements.

Return ONLY JSON in this shape:
{
  "ats_score": <0-100>,
  "overall_feedback": "<detailed overall feedback>",
  "sections": [
    {"name": "<section name, e.g. Contact Information>", "score": <0-100>, "feedback": "<specific feedback>"}
  ]
}"""


def _present(value: object) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return bool(value.strip())
    if isinstance(value, (list, dict)):
        return bool(value)
    return True


def _join(parts: Iterable[str | None], sep: str) -> str:
    return sep.join(p.strip() for p in parts if _present(p))


def format_contact(contact: ContactInfo) -> str:
    lines = ["CONTACT"]
    labels = (
        ("Name", contact.full_name),
        ("Email", contact.email),
        ("Phone", contact.phone),
        ("Location", contact.location),
        ("LinkedIn", contact.linkedin),
        ("GitHub", contact.github),
        ("Portfolio", contact.portfolio),
    )
    lines.extend(f"{label}: {value.strip()}" for label, value in labels if _present(value))
    return "\n".join(lines)


def _format_dates(exp: Experience) -> str:
    end = "Present" if exp.is_current and not _present(exp.end_date) else exp.end_date
    return _join([exp.start_date, end], " - ")


def format_experience(entries: Iterable[Experience]) -> str:
    blocks = []
    for exp in entries:
        header = _join([exp.title, exp.company, exp.location], " | ")
        dates = _format_dates(exp)
        if dates:
            header = _join([header, dates], " | ")
        bullets = [f"• {a.strip()}" for a in exp.achievements if _present(a)]
        block = "\n".join([header, *bullets]) if header else "\n".join(bullets)
        if block:
            blocks.append(block)
    return "\n\n".join(blocks)


def format_candidate(candidate: CandidateProfile) -> str:
    """Serialize a candidate profile as labelled text blocks, skipping empty fields."""
    sections = [format_contact(candidate.contact)]

    if _present(candidate.summary):
        sections.append(f"SUMMARY\n{candidate.summary.strip()}")

    experience = format_experience(candidate.experience)
    if experience:
        sections.append(f"EXPERIENCE\n{experience}")

    skill_lines = [
        f"{category}: {_join(values, ', ')}"
        for category, values in candidate.skills.items()
        if any(_present(v) for v in values)
    ]
    if skill_lines:
        sections.append("SKILLS\n" + "\n".join(skill_lines))

    education = [
        _join([
            _join([edu.degree, edu.major], " in "),
            edu.institution,
            edu.graduation_date,
            f"GPA {edu.gpa}" if _present(edu.gpa) else None,
        ], ", ")
        for edu in candidate.education
    ]
    education = [e for e in education if e]
    if education:
        sections.append("EDUCATION\n" + "\n".join(education))

    projects = []
    for proj in candidate.projects:
        lines = [_join([proj.name, proj.description], ": ")]
        if any(_present(t) for t in proj.technologies):
            lines.append(f"Technologies: {_join(proj.technologies, ', ')}")
        if _present(proj.outcomes):
            lines.append(f"Outcome: {proj.outcomes.strip()}")
        block = "\n".join(line for line in lines if line)
        if block:
            projects.append(block)
    if projects:
        sections.append("PROJECTS\n" + "\n\n".join(projects))

    certifications = [
        _join([cert.name, cert.issuer, cert.date], " - ") for cert in candidate.certifications
    ]
    certifications = [c for c in certifications if c]
    if certifications:
        sections.append("CERTIFICATIONS\n" + "\n".join(certifications))

    achievements = [
        _join([ach.title, ach.description, ach.date], " - ") for ach in candidate.achievements
    ]
    achievements = [a for a in achievements if a]
    if achievements:
        sections.append("ACHIEVEMENTS\n" + "\n".join(achievements))

    return "\n\n".join(sections)


def build_generation_prompt(
    candidate: CandidateProfile,
    job_description: str,
    template: TemplateTag | str = TemplateTag.MODERN,
    *,
    keywords: Iterable[str] | None = None,
) -> str:
    """Build the tailored-resume prompt."""
    tag = TemplateTag.coerce(template)
    parts = [
        RESUME_RULES,
        f"=== TEMPLATE STYLE ===\n{TEMPLATE_STYLES[tag]}",
    ]
    if keywords:
        parts.append("=== TARGET KEYWORDS ===\n" + ", ".join(sorted(set(keywords))))
    parts.append(f"=== JOB DESCRIPTION ===\n{job_description.strip()}")
    parts.append(f"=== CANDIDATE DATA ===\n{format_candidate(candidate)}")
    return "\n\n".join(parts)


def build_cover_letter_prompt(candidate: CandidateProfile, job_description: str) -> str:
    """Build the cover-letter prompt from the summary and the two most recent roles."""
    background = [format_contact(candidate.contact)]
    if _present(candidate.summary):
        background.append(f"SUMMARY\n{candidate.summary.strip()}")
    skills = candidate.all_skills()
    if skills:
        background.append(f"KEY SKILLS\n{', '.join(skills)}")
    recent = format_experience(candidate.experience[:2])
    if recent:
        background.append(f"RECENT EXPERIENCE\n{recent}")

    return "\n\n".join([
        COVER_LETTER_RULES,
        f"=== JOB DESCRIPTION ===\n{job_description.strip()}",
        "=== CANDIDATE BACKGROUND ===\n" + "\n\n".join(background),
    ])


def build_roast_prompt(resume_text: str, job_description: str) -> str:
    return "\n\n".join([
        ROAST_RULES,
        f"=== RESUME CONTENT ===\n{resume_text.strip()}",
        f"=== JOB DESCRIPTION ===\n{job_description.strip()}",
    ])


def build_cv_parse_prompt(resume_text: str) -> str:
    return f"{CV_PARSE_RULES}\n\n=== RESUME TEXT TO PARSE ===\n{resume_text.strip()}"


def build_analysis_prompt(resume_text: str) -> str:
    return f"{ANALYSIS_RULES}\n\n=== RESUME CONTENT ===\n{resume_text.strip()}"

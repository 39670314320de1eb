"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from resume_roast.clients.llm_client import LLMClient, LLMResponse
from resume_roast.models.candidate import (
    CandidateProfile,
    Certification,
    ContactInfo,
    Education,
    Experience,
    Project,
)
from resume_roast.storage.resume_store import ResumeStore


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Backend Engineer (3-5 years)

We are looking for a strong developer to join our platform team.

Responsibilities:
- Design and build RESTful APIs in Python with FastAPI
- Run services on AWS with Docker and Kubernetes
- Own PostgreSQL schemas and Redis caching

Requirements:
- 3+ years of Python experience
- Experience with CI/CD pipelines and unit testing
- Node.js or C# is a plus
"""


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane@example.com | +1 555 0100 | Berlin

EXPERIENCE
Backend Engineer, Acme Corp (2021 - Present)
- Built Python/FastAPI services handling 2M requests per day
- Cut PostgreSQL query latency by 40% with index tuning

Junior Developer, Widget GmbH (2019 - 2021)
- Maintained Django REST APIs deployed with Docker

SKILLS
Python, FastAPI, Django, PostgreSQL, Docker, AWS
"""


@pytest.fixture
def sample_candidate() -> CandidateProfile:
    return CandidateProfile(
        contact=ContactInfo(
            full_name="Jane Doe",
            email="jane@example.com",
            phone="+1 555 0100",
            location="Berlin",
            github="github.com/janedoe",
        ),
        summary="Backend engineer focused on Python APIs and cloud infrastructure.",
        experience=[
            Experience(
                company="Acme Corp",
                title="Backend Engineer",
                start_date="Mar 2021",
                is_current=True,
                achievements=[
                    "Built Python/FastAPI services handling 2M requests per day",
                    "Cut PostgreSQL query latency by 40% with index tuning",
                ],
            ),
            Experience(
                company="Widget GmbH",
                title="Junior Developer",
                start_date="Jan 2019",
                end_date="Feb 2021",
                achievements=["Maintained Django REST APIs deployed with Docker"],
            ),
            Experience(
                company="Startup Labs",
                title="Intern",
                start_date="Jun 2018",
                end_date="Dec 2018",
                achievements=["Wrote internal tooling scripts"],
            ),
        ],
        education=[
            Education(institution="TU Berlin", degree="BSc", major="Computer Science", graduation_date="2018"),
        ],
        skills={"languages": ["Python", "SQL"], "tools": ["Docker", "AWS"]},
        projects=[
            Project(name="queue-bench", description="Benchmark for job queues", technologies=["Python", "Redis"]),
        ],
        certifications=[Certification(name="AWS Solutions Architect", issuer="Amazon")],
    )


@pytest.fixture
def mock_llm_client() -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50)
    )
    client.generate_json = AsyncMock(return_value={})
    return client


@pytest.fixture
def resume_store(tmp_path) -> ResumeStore:
    return ResumeStore(tmp_path / "resumes.db")

import tempfile
from pathlib import Path

from atsmatch.taxonomy import CustomKeyword, KeywordEntry, KeywordIndex, SkillAreaCatalog

SMALL_SKILL_AREAS = """\
areas:
  frontend:
    name: Frontend Development
    indicators: [react, javascript, frontend]
  backend:
    name: Backend Development
    indicators: [python, api, backend]
  devops:
    name: DevOps & Infrastructure
    indicators: [docker, kubernetes]
  database:
    name: Database & Data Storage
    indicators: [postgres, sql]
    required: true
  retail-operations:
    name: Retail Operations
    indicators: [retail, cashier]
    keywords: [cashier, inventory management]
  programming:
    name: Programming
    sources: [backend, frontend]
backgrounds:
  computer-science:
    defaults: {frontend: 25, backend: 30, database: 15, devops: 15}
    roles:
      - id: fullstack-developer
        name: Full Stack Developer
        indicators: [full stack, fullstack]
        weights: {frontend: 40, backend: 40}
      - id: backend-developer
        name: Backend Developer
        indicators: [backend, api developer]
        weights: {backend: 60, database: 25, devops: 15}
        otherwise: 0
      - id: data-engineer
        name: Data Engineer
        indicators: [data engineer]
        areas: [database, programming]
        weights: {database: 30}
        otherwise: 10
"""


def small_index(*extra: KeywordEntry, custom: tuple[CustomKeyword, ...] = ()) -> KeywordIndex:
    entries = [
        KeywordEntry("Python", ("py", "python3"), 2.0, True, "backend"),
        KeywordEntry("Kubernetes", (), 2.0, True, "devops"),
        KeywordEntry("Docker", ("dockerfile",), 2.0, True, "devops"),
        KeywordEntry("PostgreSQL", ("postgres",), 2.0, True, "database"),
        KeywordEntry("Terraform", (), 2.0, False, "devops"),
        KeywordEntry("React", ("reactjs", "react.js"), 2.0, True, "frontend"),
        KeywordEntry("JavaScript", ("js", "es6"), 2.0, True, "frontend"),
        *extra,
    ]
    return KeywordIndex.build(entries, custom)


def small_catalog(text: str = SMALL_SKILL_AREAS) -> SkillAreaCatalog:
    with tempfile.TemporaryDirectory() as tmp:
        path = Path(tmp) / "skill_areas.yaml"
        path.write_text(text, encoding="utf-8")
        return SkillAreaCatalog.from_file(path)

import json
import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tools.core.errors import InvalidInputError  # noqa: E402
from resume_tools.keywords.classifier import RequirementBuckets  # noqa: E402
from resume_tools.keywords.matcher import keyword_density  # noqa: E402
from resume_tools.schemas.resume import StructuredDocument, WorkEntry  # noqa: E402
from resume_tools.scoring.optimizer import (  # noqa: E402
    calculate_fit_score,
    optimize_resume,
    rank_experience,
    recency_bonus,
    target_job_title,
)
from resume_tools.services.tools_service import load_structured_document, optimize_for_job  # noqa: E402

JOB_TEXT = "Job Title: Data Scientist\nRequired: Python, Kubernetes\nNice to have: Redis"


def _document(**overrides) -> StructuredDocument:
    fields = {
        "name": "Sam Lee",
        "email": "sam@example.com",
        "title": "Backend Engineer",
        "summary": "Backend engineer building Python services for analytics teams.",
        "skills": ["Python", "Docker"],
        "experience": [
            WorkEntry(
                company="Acme",
                title="Engineer",
                start_date="2021",
                end_date="Present",
                bullets=["Built Python services", "Reduced costs by 20%"],
            ),
        ],
        "raw_text": "Sam Lee\nBackend Engineer\nPython Docker",
    }
    fields.update(overrides)
    return StructuredDocument(**fields)


class OptimizeResumeTests(unittest.TestCase):
    def test_keyword_partition_and_density(self):
        report = optimize_resume(_document(), JOB_TEXT, current_year=2024)

        self.assertIn("Python", report.matched_keywords)
        self.assertIn("Kubernetes", report.missing_keywords)
        self.assertIn("Redis", report.missing_keywords)
        self.assertFalse(set(report.matched_keywords) & set(report.missing_keywords))
        total = len(report.matched_keywords) + len(report.missing_keywords)
        self.assertEqual(report.keyword_density, keyword_density(len(report.matched_keywords), total))
        self.assertGreaterEqual(report.fit_score, 0)
        self.assertLessEqual(report.fit_score, 100)

    def test_report_is_deterministic(self):
        first = optimize_resume(_document(), JOB_TEXT, current_year=2024)
        second = optimize_resume(_document(), JOB_TEXT, current_year=2024)
        self.assertEqual(first.model_dump(), second.model_dump())

    def test_skills_suggestion_lists_missing_keywords(self):
        report = optimize_resume(_document(), JOB_TEXT, current_year=2024)
        skills = [s for s in report.suggestions if s.section == "skills"]
        self.assertEqual(len(skills), 1)
        self.assertIn("Kubernetes", skills[0].suggested)
        self.assertTrue(skills[0].current.startswith("Current skills: Python, Docker"))

    def test_title_suggestion_requires_labelled_title(self):
        report = optimize_resume(_document(), JOB_TEXT, current_year=2024)
        titles = [s for s in report.suggestions if s.section == "title"]
        self.assertEqual(len(titles), 1)
        self.assertIn('"Data Scientist"', titles[0].suggested)

        unlabelled = optimize_resume(_document(), "Job Title Data Scientist\nRequired: Python", current_year=2024)
        self.assertFalse([s for s in unlabelled.suggestions if s.section == "title"])

    def test_short_summary_gets_rewrite_suggestion(self):
        report = optimize_resume(_document(summary="Engineer."), JOB_TEXT, current_year=2024)
        summaries = [s for s in report.suggestions if s.section == "summary"]
        self.assertEqual(len(summaries), 1)
        self.assertEqual(summaries[0].current, "Engineer.")
        self.assertIn("professional summary", summaries[0].suggested)

    def test_target_job_title(self):
        self.assertEqual(target_job_title("Position: Staff Engineer\nMore"), "Staff Engineer")
        self.assertEqual(target_job_title("  role :  Analyst"), "Analyst")
        self.assertIsNone(target_job_title("We are hiring a Role model"))


class FitScoreTests(unittest.TestCase):
    def test_components_are_weighted(self):
        buckets = RequirementBuckets(required_skills=("Python", "Go"), nice_to_have=(), technical_terms=("Go", "Python"))
        doc = StructuredDocument(raw_text="x")
        # overlap 1/2 * 50 = 25, coverage 1/2 * 25 = 12.5 -> 13, quality 0
        self.assertEqual(calculate_fit_score(["Python"], ["Go"], buckets, doc, 0), 38)

    def test_no_required_skills_uses_default_coverage(self):
        buckets = RequirementBuckets(required_skills=(), nice_to_have=(), technical_terms=())
        doc = StructuredDocument(raw_text="x")
        self.assertEqual(calculate_fit_score([], [], buckets, doc, 0), 15)


class ExperienceRankingTests(unittest.TestCase):
    def test_recency_bonus(self):
        self.assertEqual(recency_bonus("Present", 2024), 3)
        self.assertEqual(recency_bonus("current", 2024), 3)
        self.assertEqual(recency_bonus("Dec 2023", 2024), 2)
        self.assertEqual(recency_bonus("2021", 2024), 1)
        self.assertEqual(recency_bonus("2015", 2024), 0)
        self.assertEqual(recency_bonus(None, 2024), 0)

    def test_relevant_recent_entries_rank_first(self):
        entries = [
            WorkEntry(company="Old Co", title="Clerk", end_date="2015"),
            WorkEntry(company="New Co", title="Engineer", end_date="Present", bullets=["Built Python services"]),
        ]
        ranked = rank_experience(entries, "Python", current_year=2024)
        self.assertEqual(ranked, ["Engineer at New Co", "Clerk at Old Co"])

    def test_ties_keep_resume_order(self):
        entries = [
            WorkEntry(company="A", title="One", end_date="2010"),
            WorkEntry(company="B", title="Two", end_date="2011"),
        ]
        self.assertEqual(rank_experience(entries, "Python", current_year=2024), ["One at A", "Two at B"])

    def test_single_entry_is_returned_unscored(self):
        entries = [WorkEntry(company="A", title="One")]
        self.assertEqual(rank_experience(entries, "anything"), ["One at A"])
        self.assertEqual(rank_experience([], "anything"), [])


class ResumeDataLoadingTests(unittest.TestCase):
    def test_accepts_json_mapping_and_model(self):
        doc = _document()
        payload = doc.model_dump_json(by_alias=True)

        self.assertEqual(load_structured_document(payload), doc)
        self.assertEqual(load_structured_document(json.loads(payload)), doc)
        self.assertIs(load_structured_document(doc), doc)

    def test_rejects_bad_payloads(self):
        for payload in ("", "{not json", "[1, 2]", json.dumps({"name": "No raw text"})):
            with self.subTest(payload=payload):
                with self.assertRaises(InvalidInputError):
                    load_structured_document(payload)

    def test_empty_job_description_is_rejected(self):
        with self.assertRaises(InvalidInputError):
            optimize_for_job(_document(), "   ")

    def test_optimize_for_job_from_json(self):
        report = optimize_for_job(_document().model_dump_json(by_alias=True), JOB_TEXT, current_year=2024)
        self.assertIn("Python", report.matched_keywords)


if __name__ == "__main__":
    unittest.main()

import sys
import unittest
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from resume_tools.core.errors import NoContentError  # noqa: E402
from resume_tools.parsing.education import extract_education, field_of_study, find_degree  # noqa: E402
from resume_tools.parsing.extractor import (  # noqa: E402
    extract,
    extract_certifications,
    extract_name,
    extract_skills,
    extract_summary,
)
from resume_tools.parsing.sections import identify_sections, match_section_heading, section_lines  # noqa: E402
from resume_tools.parsing.utils import split_lines  # noqa: E402

SAMPLE_RESUME = (
    "Jane Doe\nSoftware Engineer\njane@example.com\n555-123-4567\n\n"
    "EXPERIENCE\nSenior Engineer | Acme Corp\nJan 2020 - Present\n- Built scalable APIs\n- Reduced latency by 40%\n\n"
    "EDUCATION\nMIT\nBachelor of Science in Computer Science, 2018\n\n"
    "SKILLS\nPython, Go, Docker"
)

FULL_RESUME = "\n".join(
    [
        "JANE DOE",
        "Senior Software Engineer",
        "jane.doe@example.com | (555) 123-4567",
        "San Francisco, CA",
        "",
        "SUMMARY",
        "Backend engineer with eight years of experience",
        "building Python services and data platforms.",
        "",
        "EXPERIENCE",
        "Acme Corp | Senior Engineer",
        "Jan 2020 - Present",
        "- Built scalable APIs serving 2M requests per day",
        "- Reduced latency by 40% through caching",
        "- Led team of 5 engineers",
        "Globex Inc — Software Engineer, Mar 2016 - Dec 2019",
        "• Migrated billing to PostgreSQL",
        "• Automated deployments with Terraform",
        "Engineer at Initech",
        "2014 - 2016",
        "1. Maintained internal tools",
        "",
        "EDUCATION",
        "Massachusetts Institute of Technology",
        "Bachelor of Science in Computer Science, 2010 - 2014",
        "",
        "Stanford University, M.S. Computer Science, 2020",
        "",
        "SKILLS",
        "Languages: Python, Go, SQL",
        "Tools: Docker, Kubernetes, Terraform, AWS, Docker",
        "",
        "CERTIFICATIONS",
        "• AWS Certified Solutions Architect",
    ]
)


class ExtractorTests(unittest.TestCase):
    def test_reference_resume_fields(self):
        doc = extract(SAMPLE_RESUME)

        self.assertEqual(doc.name, "Jane Doe")
        self.assertEqual(doc.email, "jane@example.com")
        self.assertEqual(doc.phone, "555-123-4567")
        self.assertEqual(doc.title, "Software Engineer")
        self.assertEqual(len(doc.experience), 1)
        self.assertIn("2020", doc.experience[0].start_date or "")
        self.assertEqual(doc.experience[0].end_date, "Present")
        self.assertEqual(len(doc.education), 1)
        self.assertEqual(doc.education[0].institution, "MIT")
        self.assertEqual(doc.education[0].year, "2018")
        self.assertEqual(doc.skills, ["Python", "Go", "Docker"])
        self.assertEqual(doc.raw_text, SAMPLE_RESUME)

    def test_reference_resume_company_title_and_bullets(self):
        entry = extract(SAMPLE_RESUME).experience[0]
        # Pipe split: the left side is taken as company.
        self.assertEqual(entry.company, "Senior Engineer")
        self.assertEqual(entry.title, "Acme Corp")
        self.assertEqual(entry.bullets, ["Built scalable APIs", "Reduced latency by 40%"])

    def test_empty_text_raises_no_content(self):
        with self.assertRaises(NoContentError):
            extract("")
        with self.assertRaises(NoContentError):
            extract("   \n\t  ")

    def test_full_resume_header_fields(self):
        doc = extract(FULL_RESUME)
        self.assertEqual(doc.name, "JANE DOE")
        self.assertEqual(doc.title, "Senior Software Engineer")
        self.assertEqual(doc.email, "jane.doe@example.com")
        self.assertEqual(doc.phone, "(555) 123-4567")
        self.assertEqual(doc.location, "San Francisco, CA")
        self.assertEqual(
            doc.summary,
            "Backend engineer with eight years of experience building Python services and data platforms.",
        )

    def test_full_resume_experience_entries(self):
        experience = extract(FULL_RESUME).experience
        self.assertEqual([(e.company, e.title) for e in experience], [
            ("Acme Corp", "Senior Engineer"),
            ("Globex Inc", "Software Engineer"),
            ("Initech", "Engineer"),
        ])
        self.assertEqual(experience[1].start_date, "Mar 2016")
        self.assertEqual(experience[1].end_date, "Dec 2019")
        self.assertEqual(experience[2].start_date, "2014")
        self.assertEqual(experience[2].bullets, ["Maintained internal tools"])
        self.assertEqual(len(experience[0].bullets), 3)

    def test_full_resume_sections(self):
        doc = extract(FULL_RESUME)
        self.assertEqual(doc.skills, ["Python", "Go", "SQL", "Docker", "Kubernetes", "Terraform", "AWS"])
        self.assertEqual(doc.certifications, ["AWS Certified Solutions Architect"])
        self.assertEqual(
            [(e.institution, e.year) for e in doc.education],
            [("Massachusetts Institute of Technology", "2014"), ("Stanford University", "2020")],
        )
        self.assertEqual(doc.education[0].field, "Computer Science")

    def test_name_skips_contact_and_heading_lines(self):
        lines = split_lines("\njane@example.com\n+1 555 123 4567\nSUMMARY\nJohn Smith")
        self.assertEqual(extract_name(lines), ("John Smith", 4))

    def test_name_falls_back_to_unknown(self):
        doc = extract("jane@example.com\nEXPERIENCE")
        self.assertEqual(doc.name, "Unknown")
        self.assertFalse(doc.has_name)
        self.assertIsNone(doc.title)

    def test_never_fails_on_unstructured_text(self):
        doc = extract("lorem ipsum dolor sit amet")
        self.assertEqual(doc.experience, [])
        self.assertEqual(doc.education, [])
        self.assertTrue(doc.raw_text)


class SectionTests(unittest.TestCase):
    def test_heading_must_be_whole_line(self):
        self.assertEqual(match_section_heading("  Work Experience: "), "experience")
        self.assertEqual(match_section_heading("TECHNICAL SKILLS"), "skills")
        self.assertIsNone(match_section_heading("Gained experience with Kafka"))

    def test_sections_partition_until_next_heading(self):
        lines = split_lines("Name\nSKILLS\nPython\nEDUCATION\nMIT\nMore")
        spans = identify_sections(lines)
        self.assertEqual([span.key for span in spans], ["skills", "education"])
        self.assertEqual(section_lines(lines, spans, "skills"), ["Python"])
        self.assertEqual(section_lines(lines, spans, "education"), ["MIT", "More"])
        self.assertEqual(section_lines(lines, spans, "summary"), [])


    def test_repeated_heading_merges_blocks(self):
        text = "EXPERIENCE\nAcme | Engineer | 2019 - 2021\nSKILLS\nPython\nEXPERIENCE\nBeta | Lead | 2021 - Present"
        lines = split_lines(text)
        spans = identify_sections(lines)
        self.assertEqual(
            section_lines(lines, spans, "experience"),
            ["Acme | Engineer | 2019 - 2021", "", "Beta | Lead | 2021 - Present"],
        )
        self.assertEqual([e.company for e in extract(text).experience], ["Acme", "Beta"])


class SectionRuleTests(unittest.TestCase):
    def test_skills_drop_category_prefix_long_fragments_and_duplicates(self):
        long_fragment = "x" * 61
        skills = extract_skills(["Backend: Python; Go | Python", f"* Docker *, {long_fragment}", "", "▸ Redis"])
        self.assertEqual(skills, ["Python", "Go", "Docker", "Redis"])

    def test_summary_joins_lines_with_single_spaces(self):
        self.assertEqual(extract_summary(["  First line ", "", "second line"]), "First line second line")
        self.assertIsNone(extract_summary(["", "   "]))

    def test_certifications_strip_bullets(self):
        self.assertEqual(extract_certifications(["- CKA", "", "2) PMP"]), ["CKA", "PMP"])

    def test_degree_and_field(self):
        self.assertEqual(find_degree(["Harvard", "MBA, 2015"]), "MBA")
        self.assertEqual(field_of_study("Master of Science in Data Science"), "Data Science")
        self.assertIsNone(field_of_study("MBA"))

    def test_education_year_is_last_found(self):
        entries = extract_education(["University of Somewhere", "Ph.D. in Physics", "2012 - 2017"])
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].year, "2017")
        self.assertEqual(entries[0].degree, "Ph.D. in Physics")
        self.assertEqual(entries[0].field, "Physics")

    def test_plural_degree_without_apostrophe(self):
        entries = extract_education(["University of Texas", "Masters in Computer Science, 2015"])
        self.assertEqual(entries[0].institution, "University of Texas")
        self.assertEqual(entries[0].degree, "Masters in Computer Science")
        self.assertEqual(entries[0].field, "Computer Science")
        self.assertEqual(find_degree(["Bachelors of Arts in History"]), "Bachelors of Arts in History")

    def test_education_without_degree_keeps_block_text(self):
        entries = extract_education(["Coding Bootcamp", "Full-stack program 2019"])
        self.assertEqual(entries[0].institution, "Coding Bootcamp")
        self.assertEqual(entries[0].degree, "Coding Bootcamp Full-stack program 2019")


if __name__ == "__main__":
    unittest.main()

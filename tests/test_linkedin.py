"""
Tests for LinkedIn profile import.
"""

import unittest
from unittest.mock import Mock

from parsers.linkedin import (
    HtmlProfileImporter, MockProfileImporter, ProfileUrlError, extract_username,
    get_profile_importer, is_profile_url, parse_profile_html, profile_to_resume, validate_profile_url,
)


PROFILE_URL = "https://www.linkedin.com/in/john-doe"

PROFILE_HTML = """<html><head><title>Jane Roe - LinkedIn</title></head><body>
<section id="experience-section">
<div class="pv-position-entity"><h3>Backend Engineer</h3>
<p class="pv-entity__secondary-title">Globex</p>
<span class="pv-entity__bullet-item-v2">3 yrs</span></div>
</section>
<p>Python and Docker</p>
</body></html>"""


class TestProfileUrl(unittest.TestCase):

    def test_valid_urls(self):
        self.assertTrue(is_profile_url(PROFILE_URL))
        self.assertTrue(is_profile_url("http://linkedin.com/in/jane-roe/"))
        self.assertEqual(validate_profile_url(f"  {PROFILE_URL}  "), PROFILE_URL)

    def test_invalid_urls(self):
        for url in ("", "not a url", "https://www.linkedin.com/company/acme", "https://example.com/in/john"):
            with self.assertRaises(ProfileUrlError):
                validate_profile_url(url)

    def test_extract_username(self):
        self.assertEqual(extract_username(PROFILE_URL), "john-doe")
        self.assertIsNone(extract_username("https://example.com"))


class TestImporters(unittest.TestCase):

    def test_mock_importer(self):
        profile = MockProfileImporter().import_profile(PROFILE_URL)
        self.assertEqual(profile.name, "John Doe")
        self.assertEqual(len(profile.experience), 2)

    def test_invalid_url_rejected_before_fetch(self):
        importer = HtmlProfileImporter(session=Mock())
        with self.assertRaises(ProfileUrlError):
            importer.import_profile("https://example.com/in/john")
        importer.session.get.assert_not_called()

    def test_html_importer(self):
        session = Mock()
        session.get.return_value = Mock(text=PROFILE_HTML)
        profile = HtmlProfileImporter(session=session, timeout=5).import_profile(PROFILE_URL)
        session.get.assert_called_once()
        self.assertEqual(profile.name, "Jane Roe")
        self.assertEqual(profile.experience[0].company, "Globex")

    def test_get_profile_importer(self):
        self.assertIsInstance(get_profile_importer("mock"), MockProfileImporter)
        self.assertIsInstance(get_profile_importer("html"), HtmlProfileImporter)
        with self.assertRaises(ValueError):
            get_profile_importer("scraper")


class TestParseProfileHtml(unittest.TestCase):

    def test_parse(self):
        profile = parse_profile_html(PROFILE_HTML)
        self.assertEqual(profile.name, "Jane Roe")
        self.assertEqual(profile.experience[0].title, "Backend Engineer")
        self.assertEqual(profile.experience[0].duration, "3 yrs")
        # No skills section: falls back to scanning the page
        self.assertIn("Python", profile.skills)
        self.assertIn("Docker", profile.skills)

    def test_empty_page(self):
        profile = parse_profile_html("")
        self.assertEqual(profile.name, "Unknown Name")
        self.assertEqual(profile.experience, [])
        self.assertEqual(profile.skills, [])


class TestProfileToResume(unittest.TestCase):

    def test_mock_profile(self):
        profile = MockProfileImporter().fetch_profile(PROFILE_URL)
        text, parsed = profile_to_resume(profile)
        self.assertTrue(text.startswith("John Doe"))
        self.assertIn("SKILLS: React, JavaScript", text)
        self.assertEqual(parsed.skills, profile.skills)
        self.assertEqual(parsed.job_level, "entry")
        self.assertEqual(parsed.years_of_experience, 3.0)
        self.assertEqual(parsed.education.graduation_year, 2020)
        self.assertEqual(parsed.contact_info.location, "San Francisco, CA")

    def test_years_estimated_per_position(self):
        profile = parse_profile_html(PROFILE_HTML)
        profile.experience = profile.experience * 3
        _, parsed = profile_to_resume(profile)
        self.assertEqual(parsed.years_of_experience, 4.5)

    def test_stated_years_win(self):
        profile = MockProfileImporter().fetch_profile(PROFILE_URL)
        profile.headline = "Engineer with 6 years of experience"
        _, parsed = profile_to_resume(profile)
        self.assertEqual(parsed.years_of_experience, 6.0)


if __name__ == "__main__":
    unittest.main()

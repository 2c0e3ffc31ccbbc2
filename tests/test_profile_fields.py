import unittest

from packages.tiv_profile.fields import extract_email, extract_phone, extract_name, guess_profile

RESUME_TEXT = """Resume
Priya Sharma
Email: priya.sharma@example.com
Phone: +91 98765 43210
Experience
Frontend Engineer, Jan 2021 - Present
"""


class TestProfileFields(unittest.TestCase):

    def test_email(self):
        self.assertEqual(extract_email(RESUME_TEXT), "priya.sharma@example.com")
        self.assertIsNone(extract_email("no address here"))

    def test_phone_with_country_code(self):
        """Whitespace is ignored and the 91 prefix removed."""
        self.assertEqual(extract_phone(RESUME_TEXT), "9876543210")

    def test_phone_with_separators(self):
        self.assertEqual(extract_phone("Call 415-555-0132 anytime"), "4155550132")

    def test_phone_missing(self):
        self.assertIsNone(extract_phone("Phone: n/a"))

    def test_name_skips_headers(self):
        self.assertEqual(extract_name(RESUME_TEXT), "Priya Sharma")

    def test_name_falls_back_to_first_line(self):
        self.assertEqual(extract_name("ALEX\nskills: python"), "ALEX")
        self.assertIsNone(extract_name("   \n  "))

    def test_guess_profile_blanks(self):
        """Missing fields come back as empty strings, never None."""
        guess = guess_profile("")
        self.assertEqual((guess.name, guess.email, guess.phone), ("", "", ""))

    def test_guess_profile(self):
        guess = guess_profile(RESUME_TEXT)
        self.assertEqual(guess.name, "Priya Sharma")
        self.assertEqual(guess.email, "priya.sharma@example.com")
        self.assertEqual(guess.phone, "9876543210")


if __name__ == "__main__":
    unittest.main()

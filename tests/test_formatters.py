import unittest
from datetime import datetime, timezone

from valuation.formatters import (
    format_number,
    render_calculation,
    render_help,
    render_settings_form,
    render_summary,
    render_unknown_preset,
    render_welcome
)
from valuation.models import UserPreference
from valuation.pricing import build_result


class FormatterTests(unittest.TestCase):
    def test_render_calculation(self):
        text = render_calculation(15000, 0.925, 5.45, 15000 * 0.925 / 5.45)
        self.assertEqual(
            text,
            "Buff Price: 15000\n"
            "Percentage: 92.5%\n"
            "Exchange Rate: 5.45\n"
            "Offer: *SGD 2545.87*"
        )

    def test_format_number(self):
        self.assertEqual(format_number(15000.0), "15000")
        self.assertEqual(format_number(5.43), "5.43")
        self.assertEqual(format_number(12.5), "12.5")

    def test_render_summary(self):
        results = [build_result(100, 0.93, 5.43), build_result(200, 0.93, 5.43)]
        self.assertEqual(
            render_summary(results),
            "*Summary:* 2 items\nOffers: SGD 17.13, SGD 34.25"
        )

    def test_settings_form_with_timestamp(self):
        updated = datetime(2026, 10, 18, 6, 30, tzinfo=timezone.utc)
        pref = UserPreference("u", 0.935, 5.43, "high", updated)
        text = render_settings_form(pref)
        self.assertIn("Preset: High", text)
        self.assertIn("Percentage: 93.5%", text)
        self.assertIn(
            "Last Updated: " + updated.astimezone().strftime("%d %b %Y, %H:%M"),
            text
        )

    def test_settings_form_custom_has_no_preset_line(self):
        pref = UserPreference("u", 0.9, 6.0, "custom")
        text = render_settings_form(pref)
        self.assertNotIn("Preset:", text)
        self.assertIn("Last Updated: N/A", text)

    def test_quick_actions_list_every_preset(self):
        text = render_settings_form(UserPreference("u", 0.93, 5.43))
        for name in ["default", "high", "low", "custom_rate_high", "custom_rate_low"]:
            self.assertIn(f"/settings {name} -", text)
        self.assertIn("/reset", text)

    def test_fixed_texts(self):
        self.assertIn("/calculate", render_welcome())
        self.assertIn("/help", render_welcome())
        for command in ["/calculate", "/settings", "/set", "/reset"]:
            self.assertIn(command, render_help())
        self.assertIn("custom_rate_low", render_unknown_preset("x"))


if __name__ == "__main__":
    unittest.main()

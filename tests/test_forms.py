import unittest

from application.forms import FormError, parse_registration_form, parse_transfer_form


class FormParsingTests(unittest.TestCase):
    def test_transfer_form_trims_names(self):
        form = parse_transfer_form(
            {"senderName": " alice ", "senderPass": " pw ", "count": "40", "nameTo": "bob\n"}
        )
        self.assertEqual(form.sender_name, "alice")
        self.assertEqual(form.sender_password, " pw ")
        self.assertEqual(form.recipient_name, "bob")
        self.assertEqual(form.amount, 40)

    def test_transfer_form_requires_all_fields(self):
        with self.assertRaises(FormError):
            parse_transfer_form({"senderName": "alice", "senderPass": "pw", "count": "1"})

    def test_transfer_form_rejects_non_numeric_count(self):
        with self.assertRaises(FormError):
            parse_transfer_form(
                {"senderName": "alice", "senderPass": "pw", "count": "ten", "nameTo": "bob"}
            )

    def test_registration_form(self):
        form = parse_registration_form({"name": "carol", "password": "pw", "money": " 15 "})
        self.assertEqual((form.name, form.password, form.balance), ("carol", "pw", 15))

    def test_form_error_is_a_value_error(self):
        with self.assertRaises(ValueError):
            parse_registration_form({"name": "carol", "password": "pw", "money": "1.5"})


if __name__ == "__main__":
    unittest.main()

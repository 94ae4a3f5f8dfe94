import unittest

from fractus import (
    INT_MAX,
    ArithmeticOverflow,
    DivisionByZero,
    Fraction,
    InvalidArgument,
    InvalidFormat,
    parse,
    to_fraction,
)


class ParseTests(unittest.TestCase):
    def test_integer_form(self):
        self.assertEqual(parse("-3"), Fraction(-3))
        self.assertEqual(parse("0"), Fraction(0))

    def test_ratio_form(self):
        self.assertEqual(parse("2/3"), Fraction(2, 3))
        self.assertEqual(parse("-7/4"), Fraction(-7, 4))

    def test_result_is_normalized(self):
        self.assertEqual(repr(Fraction.parse("10/4")), "Fraction(5, 2)")
        self.assertEqual(repr(parse("-0/7")), "Fraction(0, 1)")
        self.assertEqual(str(parse("-12/3")), "-4")

    def test_whitespace_and_plus_sign_rejected(self):
        for text in ["+5", " 1/2", "1/2\n", "\t-3", "+1/2"]:
            with self.subTest(text=text):
                with self.assertRaises(InvalidFormat):
                    parse(text)

    def test_round_trip(self):
        for value in [Fraction(0), Fraction(-3), Fraction(5), Fraction(2, 3), Fraction(-7, 4)]:
            self.assertEqual(parse(str(value)), value)

    def test_malformed_input_rejected(self):
        for text in ["", "/", "1/", "/2", "1 / 2", "1/-2", "1.5", "0x10", "1/2/3", "abc", "--1", "½"]:
            with self.subTest(text=text):
                with self.assertRaises(InvalidFormat):
                    parse(text)

    def test_invalid_format_is_a_value_error(self):
        with self.assertRaises(ValueError):
            parse("one half")

    def test_zero_denominator(self):
        with self.assertRaises(DivisionByZero):
            parse("1/0")

    def test_out_of_range_literal(self):
        with self.assertRaises(ArithmeticOverflow):
            parse(str(INT_MAX + 1))

    def test_non_string_rejected(self):
        with self.assertRaises(InvalidArgument):
            parse(12)


class CoercionTests(unittest.TestCase):
    def test_to_fraction(self):
        half = Fraction(1, 2)
        self.assertIs(to_fraction(half), half)
        self.assertEqual(to_fraction(3), Fraction(3))
        self.assertEqual(to_fraction(True), Fraction(1))
        self.assertEqual(to_fraction("-1/4"), Fraction(-1, 4))

    def test_to_fraction_rejects_floats(self):
        with self.assertRaises(InvalidArgument):
            to_fraction(0.25)


if __name__ == "__main__":  # pragma: no cover - direct execution helper
    unittest.main()

"""
Tests for Derivation charts and GoldSuperTaggedSentence.
"""
import json
import unittest
from ccgchart.derivation import (
    AppliedRule,
    BinaryChildrenPoints,
    Derivation,
    GoldSuperTaggedSentence,
    NoneChildPoint,
    Point,
    UnaryChildPoint,
    empty_chart,
)
from ccgchart.dictionary import Dictionary


class TestDerivation(unittest.TestCase):

    def setUp(self):
        d = Dictionary()
        self.np = d.get_category_or_create("NP")
        self.n = d.get_category_or_create("N")
        self.det = d.get_category_or_create("NP/N")

        # "the dog": NP -> NP/N N
        chart = empty_chart(2)
        chart[0][1][self.det] = AppliedRule(NoneChildPoint())
        chart[1][2][self.n] = AppliedRule(NoneChildPoint())
        chart[0][2][self.np] = AppliedRule(
            BinaryChildrenPoints(Point(0, 1, self.det), Point(1, 2, self.n)), ">")
        self.derivation = Derivation(chart, [Point(0, 2, self.np)])

    def test_empty_chart_shape(self):
        chart = empty_chart(3)
        self.assertEqual(len(chart), 4)
        self.assertTrue(all(len(row) == 4 for row in chart))
        self.assertEqual(chart[0][3], {})

    def test_get_and_contains(self):
        self.assertEqual(self.derivation.get(Point(0, 2, self.np)).rule_type, ">")
        self.assertIn(Point(1, 2, self.n), self.derivation)
        self.assertNotIn(Point(0, 2, self.n), self.derivation)

    def test_entries_ordered_by_span(self):
        spans = [(p.begin, p.end) for p, _ in self.derivation.entries()]
        self.assertEqual(spans, [(0, 1), (0, 2), (1, 2)])
        self.assertEqual(self.derivation.num_entries(), 3)

    def test_to_dict_is_json_serializable(self):
        data = self.derivation.to_dict()
        self.assertEqual(data["length"], 2)
        self.assertEqual(data["roots"], [{"begin": 0, "end": 2, "category": "NP"}])
        root_entry = [e for e in data["entries"] if e["category"] == "NP"][0]
        self.assertEqual(root_entry["rule_type"], ">")
        self.assertEqual([c["category"] for c in root_entry["children"]], ["NP/N", "N"])
        json.dumps(data)

    def test_render(self):
        lines = self.derivation.render().split("\n")
        self.assertIn("[0,2] NP -> [0,1] NP/N [1,2] N (>)", lines)
        self.assertIn("[1,2] N -> ", lines)

    def test_child_point_shapes(self):
        point = Point(0, 1, self.n)
        self.assertEqual(NoneChildPoint().points(), [])
        self.assertEqual(UnaryChildPoint(point).points(), [point])
        self.assertEqual(NoneChildPoint(), NoneChildPoint())


class TestGoldSuperTaggedSentence(unittest.TestCase):

    def setUp(self):
        self.dictionary = Dictionary()

    def test_to_dict(self):
        d = self.dictionary
        sentence = GoldSuperTaggedSentence(
            (d.get_word_or_create("走っ"),),
            (d.get_word_or_create("走る"),),
            (d.get_pos_or_create("動詞"),),
            (d.get_category_or_create("S"),))
        self.assertEqual(sentence.size, 1)
        self.assertEqual(sentence.to_dict(), {
            "words": ["走っ"],
            "base_forms": ["走る"],
            "pos": ["動詞"],
            "categories": ["S"],
        })

    def test_sequences_must_be_parallel(self):
        word = self.dictionary.get_word_or_create("dog")
        with self.assertRaises(ValueError):
            GoldSuperTaggedSentence((word,), (), (), ())


if __name__ == '__main__':
    unittest.main()

import unittest

from wikigame import extract


def processed_record():
    return {
        "id": "Q1615",
        "labels": {"en": "Neil Armstrong"},
        "descriptions": {"en": "american astronaut and aeronautical engineer"},
        "sitelinks": {"enwiki": "Neil Armstrong", "dewiki": "Neil Armstrong", "frwiki": "Neil Armstrong"},
        "claims": {
            "P31": ["Q5"],
            "P106": ["Q11631", "Q1326886"],
            "P569": ["1930-08-05"],
            "P570": ["2012-08-25"],
        },
    }


def dump_record():
    """Same entity in the shape of the official Wikidata JSON dump."""

    def item_claim(entity_id):
        return {
            "mainsnak": {
                "snaktype": "value",
                "property": "P31",
                "datavalue": {"value": {"entity-type": "item", "id": entity_id}, "type": "wikibase-entityid"},
            },
            "rank": "normal",
        }

    def time_claim(time):
        return {
            "mainsnak": {
                "snaktype": "value",
                "datavalue": {"value": {"time": time, "precision": 11}, "type": "time"},
            },
            "rank": "normal",
        }

    return {
        "type": "item",
        "id": "Q1615",
        "labels": {"en": {"language": "en", "value": "Neil Armstrong"}},
        "descriptions": {"en": {"language": "en", "value": "american astronaut and aeronautical engineer"}},
        "sitelinks": {
            "enwiki": {"site": "enwiki", "title": "Neil Armstrong", "badges": []},
            "dewiki": {"site": "dewiki", "title": "Neil Armstrong", "badges": []},
            "frwiki": {"site": "frwiki", "title": "Neil Armstrong", "badges": []},
        },
        "claims": {
            "P31": [item_claim("Q5")],
            "P106": [item_claim("Q11631"), item_claim("Q1326886")],
            "P569": [time_claim("+1930-08-05T00:00:00Z")],
            "P570": [time_claim("+2012-08-25T00:00:00Z")],
        },
    }


class SimpleFieldTests(unittest.TestCase):
    def test_processed_fields(self) -> None:
        record = processed_record()
        self.assertEqual(extract.get_id(record), "Q1615")
        self.assertEqual(extract.get_label(record), "Neil Armstrong")
        self.assertEqual(extract.get_wikipedia_title(record), "Neil Armstrong")
        self.assertEqual(extract.get_num_sitelinks(record), 3)
        self.assertEqual(extract.get_instance_of_ids(record), ["Q5"])
        self.assertEqual(extract.get_occupation_ids(record), ["Q11631", "Q1326886"])

    def test_description_first_letter_upper_cased(self) -> None:
        self.assertEqual(
            extract.get_description(processed_record()),
            "American astronaut and aeronautical engineer",
        )

    def test_dump_shape_matches_processed_shape(self) -> None:
        processed = processed_record()
        dump = dump_record()
        for getter in (
            extract.get_id,
            extract.get_label,
            extract.get_description,
            extract.get_wikipedia_title,
            extract.get_num_sitelinks,
            extract.get_instance_of_ids,
            extract.get_occupation_ids,
            extract.get_date_provenance,
        ):
            self.assertEqual(getter(dump), getter(processed), getter.__name__)

    def test_missing_fields_are_none(self) -> None:
        record = {"id": "Q1"}
        self.assertIsNone(extract.get_label(record))
        self.assertIsNone(extract.get_description(record))
        self.assertIsNone(extract.get_wikipedia_title(record))
        self.assertIsNone(extract.get_num_sitelinks(record))
        self.assertIsNone(extract.get_instance_of_ids(record))
        self.assertIsNone(extract.get_occupation_ids(record))

    def test_unclaimed_types_differ_from_empty_claim(self) -> None:
        self.assertIsNone(extract.get_instance_of_ids({"claims": {}}))
        self.assertEqual(extract.get_instance_of_ids({"claims": {"P31": []}}), [])


class DateTests(unittest.TestCase):
    def test_parse_year(self) -> None:
        self.assertEqual(extract.parse_year("-0044-01-01"), -44)
        self.assertEqual(extract.parse_year("1969-07-20"), 1969)
        self.assertEqual(extract.parse_year("+1969-07-20T00:00:00Z"), 1969)
        self.assertIsNone(extract.parse_year("sometime"))
        self.assertIsNone(extract.parse_year(""))

    def test_priority_order_wins_over_record_order(self) -> None:
        record = processed_record()
        provenance = extract.get_date_provenance(record)
        # P570 (date of death) ranks above P569 (date of birth).
        self.assertEqual(provenance, extract.DateProvenance(date_prop_id="P570", year=2012))

    def test_bce_date(self) -> None:
        record = {"claims": {"P571": ["-0044-01-01"]}}
        provenance = extract.get_date_provenance(record)
        self.assertEqual(provenance.date_prop_id, "P571")
        self.assertEqual(provenance.year, -44)

    def test_empty_date_array_is_skipped(self) -> None:
        record = {"claims": {"P575": [], "P577": ["1969-07-20"]}}
        provenance = extract.get_date_provenance(record)
        self.assertEqual(provenance.date_prop_id, "P577")
        self.assertEqual(provenance.year, 1969)

    def test_no_date_property(self) -> None:
        record = {"claims": {"P31": ["Q5"], "P9999": ["1969-07-20"]}}
        self.assertIsNone(extract.get_date_provenance(record))

    def test_custom_priority(self) -> None:
        record = processed_record()
        provenance = extract.get_date_provenance(record, (("P569", "date of birth"),))
        self.assertEqual(provenance.year, 1930)


if __name__ == "__main__":
    unittest.main()

from __future__ import annotations

import unittest

from app.mappers.column_mapper import ColumnMapper, normalize_header
from app.validators.mapping_validator import ColumnMappingError


class TestColumnMapper(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = ColumnMapper()

    def test_suggests_korean_headers(self) -> None:
        headers = ["부품명", "공급업체", "단가", "SAP코드", "분류"]

        suggested = self.mapper.suggest_mapping(headers)

        self.assertEqual(suggested["partname"], "부품명")
        self.assertEqual(suggested["vendor"], "공급업체")
        self.assertEqual(suggested["price"], "단가")
        self.assertEqual(suggested["sap_code"], "SAP코드")
        self.assertEqual(suggested["category"], "분류")

    def test_substring_match_is_case_insensitive(self) -> None:
        headers = ["Part Name", "Supplier", "Unit Price (USD)", "SAP Code", "Category"]

        resolution = self.mapper.resolve_mapping(headers)

        self.assertEqual(resolution.canonical_to_source["partname"], "Part Name")
        self.assertEqual(resolution.canonical_to_source["vendor"], "Supplier")
        self.assertEqual(resolution.canonical_to_source["price"], "Unit Price (USD)")
        self.assertEqual(resolution.canonical_to_source["sap_code"], "SAP Code")
        self.assertEqual(resolution.canonical_to_source["category"], "Category")
        self.assertEqual(resolution.match_strategies["partname"], "alias_substring")

    def test_header_is_not_claimed_twice(self) -> None:
        headers = ["name", "vendor", "price", "code"]

        resolution = self.mapper.resolve_mapping(headers)

        self.assertEqual(resolution.canonical_to_source["partname"], "name")
        self.assertEqual(resolution.canonical_to_source["sap_code"], "code")
        self.assertEqual(len(set(resolution.canonical_to_source.values())), len(resolution.canonical_to_source))

    def test_manual_override_mapping_takes_precedence(self) -> None:
        headers = ["item", "maker", "cost", "name"]
        manual = {"partname": "item", "vendor": "maker"}

        resolution = self.mapper.resolve_mapping(headers, manual_overrides=manual)

        self.assertEqual(resolution.canonical_to_source["partname"], "item")
        self.assertEqual(resolution.match_strategies["partname"], "override")
        self.assertEqual(resolution.canonical_to_source["vendor"], "maker")
        self.assertEqual(resolution.canonical_to_source["price"], "cost")
        self.assertEqual(resolution.match_strategies["price"], "alias_substring")

    def test_override_matches_normalized_header(self) -> None:
        resolution = self.mapper.resolve_mapping(
            ["Part-Name", "vendor", "price"],
            manual_overrides={"partname": "part name"},
        )

        self.assertEqual(resolution.canonical_to_source["partname"], "Part-Name")

    def test_missing_required_field_raises(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.mapper.resolve_mapping(["부품명", "공급업체", "비고"])

        missing = {
            error.canonical_field
            for error in ctx.exception.errors
            if error.code == "required_field_unmapped"
        }
        self.assertEqual(missing, {"price"})

    def test_unknown_override_field_raises(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.mapper.resolve_mapping(
                ["name", "vendor", "price"],
                manual_overrides={"colour": "name"},
            )

        codes = {error.code for error in ctx.exception.errors}
        self.assertIn("invalid_override_field", codes)

    def test_override_to_absent_header_raises(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.mapper.resolve_mapping(
                ["name", "vendor", "price"],
                manual_overrides={"sap_code": "material"},
            )

        codes = {error.code for error in ctx.exception.errors}
        self.assertIn("override_source_not_found", codes)

    def test_overrides_sharing_a_column_raise(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.mapper.resolve_mapping(
                ["name", "vendor", "price"],
                manual_overrides={"partname": "name", "price": "name"},
            )

        codes = {error.code for error in ctx.exception.errors}
        self.assertEqual(codes, {"shared_source_column"})

    def test_empty_headers_raise(self) -> None:
        with self.assertRaises(ColumnMappingError) as ctx:
            self.mapper.resolve_mapping(["", "  "])

        self.assertEqual(ctx.exception.errors[0].code, "empty_headers")

    def test_map_row_only_returns_mapped_fields(self) -> None:
        resolution = self.mapper.resolve_mapping(["부품명", "공급업체", "가격", "메모"])

        mapped = self.mapper.map_row(
            raw_row={"부품명": "볼트", "공급업체": "한일", "가격": "1200원", "메모": "x"},
            mapping=resolution,
        )

        self.assertEqual(mapped, {"partname": "볼트", "vendor": "한일", "price": "1200원"})
        self.assertFalse(resolution.is_mapped("sap_code"))

    def test_normalize_header_keeps_hangul(self) -> None:
        self.assertEqual(normalize_header(" SAP 코드 "), "sap코드")


if __name__ == "__main__":
    unittest.main()

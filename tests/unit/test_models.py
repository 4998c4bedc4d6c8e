from wastesurvey.common.models import Record, StoreOutcome, unique_methods


def test_from_wire_coerces_loose_sheet_values():
    record = Record.from_wire(
        {
            "id": "rec-1",
            "timestamp": "2026-01-05T03:00:00.000Z",
            "fullName": "Malee",
            "householdSize": "3",
            "wasteMethods": ["นำไปทำปุ๋ย", "นำไปทำปุ๋ย"],
            "waterMethods": None,
            "shopName": "",
            "lat": "19.302052",
            "lng": "not-a-number",
        }
    )

    assert record.household_size == 3
    assert record.waste_methods == ("นำไปทำปุ๋ย",)
    assert record.water_methods == ()
    assert record.shop_name is None
    assert record.lat == 19.302052
    assert record.lng is None
    assert record.community == ""


def test_from_wire_missing_household_size_reads_as_zero():
    assert Record.from_wire({"id": "x", "householdSize": ""}).household_size == 0


def test_to_wire_uses_camel_case_and_omits_empty_optionals():
    record = Record.from_wire({"id": "rec-1", "fullName": "A", "wasteMethods": ["m"]})

    wire = record.to_wire()

    assert wire["fullName"] == "A"
    assert wire["wasteMethods"] == ["m"]
    assert wire["imageUrl"] == ""
    assert "shopName" not in wire
    assert "lat" not in wire


def test_store_outcome_truthiness():
    assert StoreOutcome(ok=True)
    assert not StoreOutcome(ok=False, error="nope")


def test_unique_methods_keeps_first_occurrence_order():
    assert unique_methods(["b", "a", "b", ""]) == ("b", "a")
    assert unique_methods(None) == ()

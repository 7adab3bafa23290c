"""Unit tests for dataset record parsing."""

from bikefit.search import BikeRecord, normalize_header, records_from_rows


def test_normalize_header():
    assert normalize_header("  Seat Tube  Angle ") == "seat_tube_angle"
    assert normalize_header("Frame Material") == "material"
    assert normalize_header("Reach") == "reach"


def test_records_from_rows():
    values = [
        ["Brand", "Model", "Frame Material", "Reach"],
        ["Trek", "Domane", "Carbon", "380"],
        ["Canyon"],
    ]
    assert records_from_rows(values) == [
        {"brand": "Trek", "model": "Domane", "material": "Carbon", "reach": "380"},
        {"brand": "Canyon", "model": None, "material": None, "reach": None},
    ]


def test_header_only_sheet_is_empty():
    assert records_from_rows([["Brand", "Reach"]]) == []
    assert records_from_rows([]) == []


def test_record_resolves_aliased_columns():
    record = BikeRecord.from_mapping({
        "brand": " Trek ",
        "reach": "380",
        "stack": "560mm",
        "seat_tube_angle_°": "73.5°",
        "s/r_ratio": "1.47",
        "style": "",
    })
    assert record.brand == "Trek"
    assert record.reach == 380
    assert record.stack == 560
    assert record.sta == 73.5
    assert record.sr_ratio == 1.47
    assert record.style is None
    assert record.raw["brand"] == " Trek "

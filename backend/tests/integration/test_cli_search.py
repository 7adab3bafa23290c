"""Integration tests for the bikefit-search CLI."""

import csv
import json

import pytest

from bikefit.cli import load_dataset, main


@pytest.fixture
def dataset_csv(tmp_path, bike_dataset):
    path = tmp_path / "bikes.csv"
    headers = ["Brand", "Model", "Size", "Reach", "Stack", "Style", "Material", "SR Ratio", "STA"]
    keys = ["brand", "model", "size", "reach", "stack", "style", "material", "sr_ratio", "sta"]
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(headers)
        for bike in bike_dataset:
            writer.writerow([bike.get(key, "") for key in keys])
    return path


def test_load_csv(dataset_csv):
    records = load_dataset(dataset_csv)
    assert len(records) == 152
    assert records[0]["brand"] == "Trek"
    assert records[0]["sr_ratio"]


def test_load_json_variants(tmp_path):
    listing = tmp_path / "list.json"
    listing.write_text(json.dumps([{"reach": "380", "stack": "560"}]))
    sheet = tmp_path / "sheet.json"
    sheet.write_text(json.dumps({"values": [["Reach", "Stack"], ["380", "560"]]}))

    assert load_dataset(listing) == [{"reach": "380", "stack": "560"}]
    assert load_dataset(sheet) == [{"reach": "380", "stack": "560"}]


def test_json_output(dataset_csv, capsys):
    exit_code = main([
        str(dataset_csv), "--reach", "380", "--stack", "560",
        "--reach-range", "10", "--stack-range", "10", "--json",
    ])
    assert exit_code == 0
    body = json.loads(capsys.readouterr().out)
    assert body["totalMatches"] == 150
    assert body["displayed"] == 100


def test_table_output(dataset_csv, capsys):
    exit_code = main([str(dataset_csv), "--reach", "380", "--stack", "560", "--brand", "Trek"])
    assert exit_code == 0
    out = capsys.readouterr().out
    assert out.splitlines()[0].startswith("Brand")
    assert "Found" in out


def test_missing_file(tmp_path):
    assert main([str(tmp_path / "nope.csv"), "--reach", "380", "--stack", "560"]) == 1


def test_invalid_json_shape(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"rows": []}))
    assert main([str(path), "--reach", "380", "--stack", "560"]) == 1

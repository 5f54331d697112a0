import json

import yaml
from click.testing import CliRunner

from sales_dashboard.cli import main as cli


def write_catalog(path):
    records = [
        {"id": 1, "title": "Backpack", "description": "pack", "price": 150, "category": "bags",
         "image": "", "sold": True, "dateOfSale": "2022-03-10T10:00:00+05:30"},
        {"id": 2, "title": "Jacket", "description": "warm", "price": 150, "category": "clothing",
         "image": "", "sold": False, "dateOfSale": "2022-03-12T10:00:00+05:30"},
        {"id": 3, "title": "Monitor", "description": "screen", "price": 599, "category": "electronics",
         "image": "", "sold": True, "dateOfSale": "2022-04-01T10:00:00+05:30"},
    ]
    path.write_text(json.dumps(records), encoding="utf-8")
    return path


def write_config(tmp_path, data_dir):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump({"output_dir": str(data_dir), "page_size": 2}), encoding="utf-8")
    return path


def test_cli_prints_listing_chart_and_stats(tmp_path):
    catalog = write_catalog(tmp_path / "catalog.json")
    cfg_path = write_config(tmp_path, tmp_path / "data")

    runner = CliRunner()
    res = runner.invoke(cli, ["--source", str(catalog), "--config", str(cfg_path), "--month", "3"])

    assert res.exit_code == 0, res.output
    assert "Backpack" in res.output
    assert "Monitor" not in res.output
    assert "Page 1 of 1" in res.output
    assert "Bar Chart Stats - Month 3" in res.output
    assert " 100-200 | ## 2" in res.output
    assert "Total Sale: $150.00" in res.output
    assert "Total Items Sold: 1" in res.output
    assert "Total Items Not Sold: 1" in res.output


def test_cli_without_month_lists_all_and_charts_nothing(tmp_path):
    catalog = write_catalog(tmp_path / "catalog.json")
    cfg_path = write_config(tmp_path, tmp_path / "data")

    res = CliRunner().invoke(cli, ["--source", str(catalog), "--config", str(cfg_path), "--page", "2"])

    assert res.exit_code == 0, res.output
    assert "Monitor" in res.output
    assert "Page 2 of 2" in res.output
    assert "Select a month" in res.output
    assert "Total Sale: $0.00" in res.output


def test_cli_writes_report(tmp_path):
    catalog = write_catalog(tmp_path / "catalog.json")
    data_dir = tmp_path / "data"
    cfg_path = write_config(tmp_path, data_dir)

    res = CliRunner().invoke(
        cli, ["--source", str(catalog), "--config", str(cfg_path), "--month", "3", "--output", "csv"]
    )

    assert res.exit_code == 0, res.output
    assert (data_dir / "PriceRanges.csv").exists()
    assert (data_dir / "SalesStats.csv").exists()


def test_cli_reports_fetch_failure(tmp_path):
    cfg_path = write_config(tmp_path, tmp_path / "data")
    res = CliRunner().invoke(cli, ["--source", str(tmp_path / "missing.json"), "--config", str(cfg_path)])
    assert res.exit_code != 0
    assert "Transactions file not found" in res.output


def test_cli_rejects_bad_month(tmp_path):
    catalog = write_catalog(tmp_path / "catalog.json")
    res = CliRunner().invoke(cli, ["--source", str(catalog), "--month", "13"])
    assert res.exit_code != 0

import json

import pytest

from core.data import table_from_mapping

RAW_TABLE = {
    "Springfield": {
        "Ana Álvarez": {
            "city": "Springfield",
            "judge_name": "Ana Álvarez",
            "denied_percentage": "30%",
            "granted_asylum_percentage": "60%",
            "granted_other_relief_percentage": "10%",
            "total_decisions": 100,
        },
        "Ben Carter": {
            "city": "Springfield",
            "judge_name": "Ben Carter",
            "denied_percentage": 50,
            "granted_asylum_percentage": 40,
            "granted_other_relief_percentage": 10,
            "total_decisions": 50,
        },
        "carl Duarte": {
            "city": "Springfield",
            "judge_name": "carl Duarte",
            "denied_percentage": "70.5%",
            "granted_asylum_percentage": "20.5%",
            "granted_other_relief_percentage": "9%",
            "total_decisions": "25",
        },
    },
    "Shelbyville": {
        "Dana Evans": {
            "city": "Shelbyville",
            "judge_name": "Dana Evans",
            "denied_percentage": "",
            "granted_asylum_percentage": "n/a",
            "granted_other_relief_percentage": None,
            "total_decisions": 0,
        },
    },
}


@pytest.fixture
def raw_table():
    return RAW_TABLE


@pytest.fixture
def table():
    return table_from_mapping(RAW_TABLE)


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "judges.json"
    path.write_text(json.dumps(RAW_TABLE), encoding="utf-8")
    return path

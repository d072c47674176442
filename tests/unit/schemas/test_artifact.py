# schemas/test_artifact.py

import json

import pytest

from emissions_aggregator.schemas import (
    ChartPoint,
    ChartSection,
    EmissionArtifact,
    EmissionData,
    ProtocolMetadata,
    ReferenceTables,
)

pytestmark = pytest.mark.unit


def _artifact(**overrides: object) -> EmissionArtifact:
    fields = {
        "documented_data": EmissionData(
            data=[
                ChartSection(
                    label="Team",
                    data=[ChartPoint(timestamp=10, unlocked=5, raw_emission=5)],
                ),
            ],
        ),
        "metadata": ProtocolMetadata(token="coingecko:uniswap", sources=["docs"]),
        "name": "uniswap",
    }
    return EmissionArtifact(**(fields | overrides))


def test_to_json_uses_camel_case_aliases() -> None:
    """
    ARRANGE: artifact with a USD chart
    ACT:     serialise with to_json
    ASSERT:  documentedData, unlockUsdChart, tokenAllocation and rawEmission keys
    """
    artifact = _artifact(unlock_usd_chart=[("10", 2.5)])

    actual = json.loads(artifact.to_json())

    assert set(actual) >= {"documentedData", "unlockUsdChart", "categories"}
    assert "tokenAllocation" in actual["documentedData"]
    assert actual["documentedData"]["data"][0]["data"][0]["rawEmission"] == 5


def test_to_json_omits_absent_optional_fields() -> None:
    """
    ARRANGE: artifact without realTimeData, gecko_id or futures
    ACT:     serialise with to_json
    ASSERT:  none of those keys are present
    """
    actual = json.loads(_artifact().to_json())

    assert not {"realTimeData", "gecko_id", "futures"} & set(actual)


def test_to_json_preserves_extra_metadata_keys() -> None:
    """
    ARRANGE: metadata with an adapter-specific key
    ACT:     serialise with to_json
    ASSERT:  key is carried through verbatim
    """
    actual = json.loads(_artifact().to_json())

    assert actual["metadata"]["sources"] == ["docs"]


def test_usd_chart_serialises_as_pairs() -> None:
    """
    ARRANGE: artifact with two USD chart entries
    ACT:     serialise with to_json
    ASSERT:  entries are [timestamp, usd] arrays
    """
    artifact = _artifact(unlock_usd_chart=[("10", 1.0), ("20", 0.0)])

    actual = json.loads(artifact.to_json())

    assert actual["unlockUsdChart"] == [["10", 1.0], ["20", 0.0]]


def test_reference_tables_parse_camel_case_json() -> None:
    """
    ARRANGE: JSON document with protocols and parentProtocols
    ACT:     ReferenceTables.model_validate_json
    ASSERT:  lookups find the parsed entries
    """
    payload = json.dumps(
        {
            "protocols": [
                {"id": "1", "name": "Aave V3", "parentProtocol": "parent#aave"},
            ],
            "parentProtocols": [
                {"id": "parent#aave", "name": "Aave", "gecko_id": "aave"},
            ],
        },
    )

    tables = ReferenceTables.model_validate_json(payload)

    assert tables.protocol_by_id("1").parent_protocol == "parent#aave"
    assert tables.parent_by_gecko_id("aave").name == "Aave"

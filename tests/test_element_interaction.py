"""Tests for element cut toggling, drill-down and data proxies."""

from __future__ import annotations

import pytest

from src.core.visualisation import Element


@pytest.fixture
def loaded_element(dataset, element_attrs, age_dimension_rows, age_observation_payload):
    element = Element(element_attrs, dataset, visualisation_id="vis1")
    element.dimensions[0].set_data(age_dimension_rows)
    element.observations[0].set_data(age_observation_payload)
    return element


@pytest.fixture
def region_element(dataset):
    element = Element(
        {
            "id": "el-region",
            "measure": {"id": "count"},
            "aggregation": "sum",
            "dimensions": [{"field": {"id": "region"}}],
        },
        dataset,
    )
    element.dimensions[0].set_data([])
    element.observations[0].set_data(
        [
            {"id": "E92000001", "level": "country", "total": 5},
            {"id": "north", "level": "country", "total": 1},
        ]
    )
    return element


def test_click_adds_cut_event(loaded_element):
    events = []
    loaded_element.events.subscribe("addCut", events.append)

    assert loaded_element.feature_click(0) is True
    assert events == [{"age": "a1"}]


def test_click_on_cut_value_removes_cut(loaded_element, dataset):
    dataset.add_cut({"age": "a2"})
    removed = []
    loaded_element.events.subscribe("removeCut", removed.append)

    loaded_element.feature_click(1)

    assert removed == [["age"]]


def test_watched_dataset_applies_cut_toggle(loaded_element, dataset):
    dataset.watch(loaded_element)

    loaded_element.feature_click(0)
    assert dataset.get_cut("age") == "a1"
    assert loaded_element.is_cut()
    assert loaded_element.get_cut() == "a1"
    assert loaded_element.has_cut_value(0)
    assert not loaded_element.has_cut_value(1)

    loaded_element.feature_click(0)
    assert not loaded_element.is_cut()
    assert dataset.cut == {"gender": "f"}


def test_non_interactive_element_ignores_clicks(dataset, element_attrs, age_observation_payload):
    element = Element({**element_attrs, "interactive": False}, dataset)
    element.observations[0].set_data(age_observation_payload)
    events = []
    element.events.subscribe("addCut", events.append)

    assert element.feature_click(0) is False
    assert events == []


def test_hierarchical_click_drills_down_on_numeric_parent(region_element, dataset):
    drilled = []
    dataset.events.subscribe("drillDown", drilled.append)
    cut_events = []
    region_element.events.subscribe("addCut", cut_events.append)

    region_element.feature_click(0)

    assert len(drilled) == 1
    assert drilled[0].to_dict() == {
        "dimension": "region",
        "level": "country",
        "parentId": "92000001",
    }
    assert dataset.drilldowns == drilled
    assert cut_events == []


def test_hierarchical_click_without_parent_reference_does_nothing(region_element, dataset):
    assert region_element.feature_click(1) is True
    assert dataset.drilldowns == []


def test_click_out_of_range_raises(loaded_element):
    with pytest.raises(IndexError):
        loaded_element.feature_click(9)


def test_proxies(loaded_element, age_dimension_rows):
    assert loaded_element.get_field_id() == "age"
    assert loaded_element.get_labels() == age_dimension_rows
    assert loaded_element.get_observations()[0] == {"id": "a1", "total": 10}
    assert loaded_element.get_observation(1)["total"] == 32
    assert loaded_element.get_total() == 42
    assert loaded_element.get_measure_label() == "People"


def test_get_label_falls_back_to_blank_label(loaded_element):
    assert loaded_element.get_label({"id": "a1"}) == {"id": "a1", "label": "0-4"}
    assert loaded_element.get_label({"id": "zz", "total": 1}) == {
        "label": "",
        "id": "zz",
        "total": 1,
    }


def test_has_cut_value_reads_the_elements_own_rows(dataset, element_attrs):
    by_sum = Element(element_attrs, dataset)
    by_avg = Element({**element_attrs, "id": "el2", "aggregation": "avg"}, dataset)
    by_sum.observations[0].set_data([{"id": "a1", "total": 1}, {"id": "a2", "total": 2}])
    by_avg.observations[0].set_data([{"id": "a2", "total": 9}, {"id": "a1", "total": 3}])
    dataset.add_cut({"age": "a2"})

    assert by_avg.get_observation(0)["id"] == "a2"
    assert by_avg.has_cut_value(0)
    assert not by_avg.has_cut_value(1)
    assert by_sum.has_cut_value(1)
    assert not by_sum.has_cut_value(0)

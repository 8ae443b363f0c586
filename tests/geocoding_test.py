import os
import sys

import pytest

# Ensure we can import from the project
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from waypoint.graph.street_graph import StreetGraph
from waypoint.search.geocoding import Geocoder, clean_string


def sample_graph():
    g = StreetGraph()
    g.add_node(1, 0.0, 0.0, "Sather Gate")
    g.add_node(2, 1.0, 0.0)
    g.add_node(3, 2.0, 0.0, "Sather Tower")
    g.add_node(4, 0.1, 0.1, "Satellite Cafe")  # isolated, not routable
    g.add_node(5, 5.0, 5.0, "Sather Gate")
    g.add_node(6, 5.0, 6.0, "St. Mary's")
    g.add_edge(1, 2)
    g.add_edge(2, 3)
    g.add_edge(5, 6)
    return g


def test_clean_string():
    assert clean_string("St. Mary's Church!") == "st marys church"
    assert clean_string("ABC 123") == "abc "


def test_closest_skips_isolated_nodes():
    geo = Geocoder(sample_graph())
    assert geo.closest(0.1, 0.1) == 1
    assert geo.closest(1.2, -0.3) == 2
    assert geo.closest(5.0, 5.9) == 6


def test_closest_on_graph_without_edges_raises():
    g = StreetGraph()
    g.add_node(1, 0.0, 0.0)
    with pytest.raises(ValueError):
        Geocoder(g).closest(0.0, 0.0)


def test_locations_by_prefix_dedupes_names():
    geo = Geocoder(sample_graph())
    assert sorted(geo.locations_by_prefix("sat")) == ["Satellite Cafe", "Sather Gate", "Sather Tower"]
    assert sorted(geo.locations_by_prefix("SATHER")) == ["Sather Gate", "Sather Tower"]
    assert geo.locations_by_prefix("st m") == ["St. Mary's"]
    assert geo.locations_by_prefix("zzz") == []


def test_locations_exact_match():
    geo = Geocoder(sample_graph())
    found = geo.locations("sather gate")
    assert sorted(m["id"] for m in found) == [1, 5]
    assert all(m["name"] == "Sather Gate" for m in found)
    assert found[0].keys() == {"id", "name", "lon", "lat"}
    assert geo.locations("st marys") == [{"id": 6, "name": "St. Mary's", "lon": 5.0, "lat": 6.0}]
    assert geo.locations("nowhere") == []


def test_closest_on_long_monotone_street():
    g = StreetGraph()
    n = 2500
    for i in range(n):
        g.add_node(i, -122.3 + i * 1e-5, 37.8 + i * 1e-5)
    for i in range(n - 1):
        g.add_edge(i, i + 1)
    geo = Geocoder(g)
    assert geo.closest(-122.3 + (n - 1) * 1e-5, 37.8 + (n - 1) * 1e-5) == n - 1
    assert geo.closest(-122.4, 37.7) == 0

import itertools

import pytest

from blockstrike.domains.rules import MoveRules
from blockstrike.domains.units import Units
from blockstrike.errors import GraphNotLinked
from blockstrike.search.bfs import Step, find_path
from blockstrike.search.graph import TransitionGraph
from blockstrike.search.paths import path_search


def u(*states, m=2):
    return Units.from_states(states, m)


@pytest.fixture
def graph22():
    return TransitionGraph.full(2, 2, MoveRules(2, {0: {0}, 1: {1}}))


class TestFindPath:
    def test_two_strikes(self, graph22):
        res = find_path(graph22, u(0, 0), [u(1, 1)])
        assert res["termination"] == "ok"
        assert res["g"] == 2
        assert res["path"] == [Step(u(0, 0), 0), Step(u(1, 0), 1), Step(u(1, 1), 0)]

    def test_begin_is_an_end(self, graph22):
        res = find_path(graph22, u(0, 1), [u(1, 1), u(0, 1)])
        assert res["path"] == [Step(u(0, 1), 0)]
        assert res["g"] == 0

    def test_nearest_end_wins(self, graph22):
        res = find_path(graph22, u(0, 0), [u(1, 1), u(0, 1)])
        assert [s.units for s in res["path"]] == [u(0, 0), u(0, 1)]
        assert res["path"][0].hit == 1

    def test_begin_not_enumerated(self):
        g = TransitionGraph.build(u(0, 0), u(1, 0), MoveRules(2, {0: {0}, 1: {1}}))
        res = find_path(g, u(1, 1), [u(0, 0)])
        assert res["path"] is None
        assert res["termination"] == "begin_not_enumerated"

    def test_unreachable(self):
        g = TransitionGraph.full(2, 2, MoveRules(2, {0: {0, 1}, 1: {0, 1}}))
        res = find_path(g, u(0, 0), [u(1, 0)])
        assert res["path"] is None
        assert res["g"] is None
        assert res["termination"] == "exhausted"
        assert res["expanded"] == 2

    def test_timeout(self, graph22):
        res = find_path(graph22, u(0, 0), [u(1, 1)], timeout_sec=0)
        assert res["termination"] == "timeout"
        assert res["path"] is None

    def test_unlinked_graph(self):
        g = TransitionGraph(u(0, 0), u(1, 1))
        with pytest.raises(GraphNotLinked):
            find_path(g, u(0, 0), [u(1, 1)])

    def test_three_state_wrap(self):
        g = TransitionGraph.full(2, 3, MoveRules(2, {0: {0}, 1: {0, 1}}))
        res = find_path(g, u(0, 0, m=3), [u(2, 1, m=3)])
        assert res["g"] == 2
        assert [s.hit for s in res["path"][:-1]] == [0, 1]


class TestPathSearchAgreement:
    def test_same_example(self, graph22):
        res = path_search(graph22, u(0, 0), [u(1, 1)])
        assert res["algorithm"] == "PATHS"
        assert res["path"] == [Step(u(0, 0), 0), Step(u(1, 0), 1), Step(u(1, 1), 0)]

    def test_every_start_matches(self):
        rules = MoveRules(3, {0: [0, 1], 1: [1, 2], 2: [2]})
        g = TransitionGraph.full(3, 3, rules)
        goals = [Units.zeros(3, 3), Units.from_states([1, 1, 1], 3)]
        for states in itertools.product(range(3), repeat=3):
            begin = Units.from_states(states, 3)
            a = find_path(g, begin, goals)
            b = path_search(g, begin, goals)
            assert a["path"] == b["path"], states
            assert a["termination"] == b["termination"] == "ok"

    def test_paths_reports_missing_begin(self):
        g = TransitionGraph.build(u(0, 0), u(1, 0), MoveRules(2, {0: {0}, 1: {1}}))
        assert path_search(g, u(1, 1), [u(0, 0)])["termination"] == "begin_not_enumerated"

    def test_paths_exhausts(self):
        g = TransitionGraph.full(2, 2, MoveRules(2, {0: {0, 1}, 1: {0, 1}}))
        assert path_search(g, u(0, 0), [u(1, 0)])["termination"] == "exhausted"

    def test_paths_timeout(self, graph22):
        res = path_search(graph22, u(0, 0), [u(1, 1)], timeout_sec=0)
        assert res["termination"] == "timeout"
        assert res["path"] is None

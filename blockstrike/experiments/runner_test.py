import csv

from blockstrike.experiments.plot import agg_mean, read_rows
from blockstrike.experiments.runner import _gen, parse_size, ring_rules


class TestRunner:
    def test_ring_rules(self):
        rules = ring_rules(5)
        assert rules[0] == frozenset({4, 0, 1})
        assert rules[4] == frozenset({3, 4, 0})
        assert ring_rules(4, width=0)[2] == frozenset({2})

    def test_gen_is_seeded(self):
        a = _gen([(3, 2), (2, 3)], per_size=2)
        b = _gen([(3, 2), (2, 3)], per_size=2)
        assert [i.begin for i in a] == [i.begin for i in b]
        assert [i.seed for i in a] == [0, 1, 2, 3]
        assert len(a[3].begin) == 2 and a[3].begin.max_state == 3

    def test_parse_size(self):
        assert parse_size("4x3") == (4, 3)


class TestPlotInput:
    def test_read_and_aggregate(self, tmp_path):
        path = tmp_path / "run.csv"
        with path.open("w", newline="") as f:
            w = csv.writer(f)
            w.writerow(["algorithm", "nodes", "enumerate_sec", "link_sec", "expanded", "time_sec"])
            w.writerow(["BFS", 4, "0.5", "0.5", 2, "0.1"])
            w.writerow(["BFS", 4, "1.0", "1.0", 4, "0.3"])
            w.writerow(["BFS", "", "", "", "", ""])
        rows = read_rows([path])
        assert len(rows) == 2
        assert agg_mean(rows, "build_sec") == {"BFS": ([4], [1.5])}
        assert agg_mean(rows, "expanded") == {"BFS": ([4], [3])}

"""
ResultTracker bookkeeping.
"""
from alphabet_sweep.alphabet import identity_alphabet
from alphabet_sweep.tracker import BestEvent, ResultTracker


def test_report_notifies_sink_with_snapshot():
    events = []
    tracker = ResultTracker(on_best=events.append)
    alphabet = identity_alphabet()

    tracker.report(5, alphabet, iteration=12)
    alphabet[0], alphabet[1] = alphabet[1], alphabet[0]

    assert events == [BestEvent(iteration=12, score=5,
                                alphabet="ABCDEFGHIJKLMNOPQRSTUVWXYZ")]
    assert tracker.best_score == 5
    assert tracker.best_alphabet == "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


def test_summary():
    tracker = ResultTracker()
    tracker.report(3, identity_alphabet(), iteration=1)
    tracker.report(7, identity_alphabet(), iteration=40)
    for s in [3, 7, 5]:
        tracker.record_restart(s)

    summary = tracker.summary()
    assert summary["best_score"] == 7
    assert summary["n_improvements"] == 2
    assert summary["n_restarts"] == 3
    assert summary["top_restart_scores"] == [7, 5, 3]
    assert [h["iteration"] for h in summary["history"]] == [1, 40]

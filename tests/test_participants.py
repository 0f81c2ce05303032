import random
import unittest

from crashgame.game import ParticipantRegistry
from crashgame.game.participants import score_for
from crashgame.models import Outcome, Participant


class TestParticipantRegistry(unittest.TestCase):

    def setUp(self):
        self.registry = ParticipantRegistry(synthetic_count=4, rng=random.Random(3))

    def test_layout(self):
        self.assertEqual(len(self.registry), 5)
        self.assertEqual([p.id for p in self.registry], [1, 2, 3, 4, 5])
        self.assertTrue(self.registry.primary.is_primary)
        self.assertEqual(self.registry.primary.display_name, "me")
        self.assertEqual([p.display_name for p in self.registry.synthetic], ["CPU 1", "CPU 2", "CPU 3", "CPU 4"])
        self.assertEqual(sum(p.is_primary for p in self.registry), 1)

    def test_initialize_seeds_stakes(self):
        self.registry.initialize(50, 2.5)
        self.assertEqual(self.registry.primary.wager, 50)
        self.assertEqual(self.registry.primary.cash_out_target, 2.5)
        for participant in self.registry.synthetic:
            self.assertTrue(1 <= participant.wager <= 100)
            self.assertEqual(participant.wager, int(participant.wager))
            self.assertTrue(0 <= participant.cash_out_target <= 10)
            self.assertEqual(round(participant.cash_out_target, 2), participant.cash_out_target)
            self.assertIsNone(participant.score)

    def test_initialize_clears_previous_scores(self):
        self.registry.initialize(50, 1.5)
        self.registry.settle(9.0)
        self.assertEqual(self.registry.primary.score, 75)
        self.registry.initialize(10, 2.0)
        self.assertTrue(all(p.score is None for p in self.registry))
        self.assertTrue(all(p.outcome is None for p in self.registry))

    def test_settle_applies_same_rule_to_everyone(self):
        self.registry.initialize(50, 4.0)
        self.registry.settle(5.0)
        for participant in self.registry:
            self.assertEqual(participant.score, score_for(participant, 5.0))
            self.assertIsNotNone(participant.outcome)
        self.assertEqual(self.registry.primary.outcome, Outcome.CASHED_OUT)

    def test_reset(self):
        self.registry.initialize(50, 4.0)
        self.registry.settle(5.0)
        self.registry.reset()
        for participant in self.registry:
            self.assertIsNone(participant.wager)
            self.assertIsNone(participant.cash_out_target)
            self.assertIsNone(participant.score)

    def test_ranking(self):
        registry = ParticipantRegistry(synthetic_count=3)
        stakes = [(10, 2.0), (10, 8.0), (100, 3.0), (40, 2.0)]
        for participant, (wager, target) in zip(registry, stakes):
            participant.wager = wager
            participant.cash_out_target = target
        registry.settle(5.0)
        # ids 3 (300), 4 (80), 1 (20); id 2 crashed
        self.assertEqual([p.id for p in registry.ranking()], [3, 4, 1, 2])


class TestScoring(unittest.TestCase):

    def participant(self, wager, target):
        return Participant(id=1, display_name="p", wager=wager, cash_out_target=target)

    def test_cash_out_below_crash(self):
        self.assertEqual(score_for(self.participant(50, 4.0), 5.0), 200)

    def test_target_equal_to_crash_loses(self):
        self.assertIsNone(score_for(self.participant(50, 5.0), 5.0))

    def test_target_above_crash_loses(self):
        self.assertIsNone(score_for(self.participant(50, 6.0), 5.0))

    def test_no_wager(self):
        self.assertIsNone(score_for(self.participant(None, 2.0), 5.0))

    def test_score_is_rounded(self):
        self.assertEqual(score_for(self.participant(33, 1.37), 2.0), 45)


if __name__ == "__main__":
    unittest.main()

from unittest import TestCase, main

from evaluate import evaluate


class TestEvaluate(TestCase):
    def test_random_games(self):
        """
        Random games end and report the spawned values.
        """
        result = evaluate(length=3, size=3, seed=5)
        self.assertEqual(sum(result["max_tile"].values()), 3)
        self.assertTrue(set(result["spawned"]) <= {2, 4})
        self.assertGreater(result["spawned"][2], result["spawned"].get(4, 0))


if __name__ == '__main__':
    main()

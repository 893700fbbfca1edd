import logging
import unittest

import numpy as np

import cachematrix


class _CountingInverter:
    def __init__(self):
        self.calls = []

    def __call__(self, matrix, **options):
        self.calls.append(options)
        return cachematrix.invert(matrix)


class TestCaching(unittest.TestCase):
    def setUp(self):
        self.m = np.array([[0.5, -1.0], [-0.25, 0.75]])
        self.inverter = _CountingInverter()

    def test_second_solve_returns_cached_value_without_recomputing(self):
        holder = cachematrix.CachedMatrix(self.m)

        first = cachematrix.cache_solve(holder, inverter=self.inverter)
        second = cachematrix.cache_solve(holder, inverter=self.inverter)

        self.assertEqual(len(self.inverter.calls), 1)
        self.assertIs(first, second)
        np.testing.assert_allclose(first, [[6.0, 8.0], [2.0, 4.0]])
        self.assertEqual(holder.state, cachematrix.CACHED)

    def test_set_matrix_invalidates_even_for_equal_value(self):
        holder = cachematrix.CachedMatrix(self.m)
        cachematrix.cache_solve(holder, inverter=self.inverter)

        holder.set_matrix(self.m.copy())
        self.assertIsNone(holder.get_cached_inverse())
        self.assertEqual(holder.state, cachematrix.EMPTY)

        cachematrix.cache_solve(holder, inverter=self.inverter)
        self.assertEqual(len(self.inverter.calls), 2)

    def test_set_matrix_same_object_still_invalidates(self):
        holder = cachematrix.CachedMatrix(self.m)
        cachematrix.cache_solve(holder)

        holder.set_matrix(holder.get_matrix())
        self.assertFalse(holder.has_cached_inverse)

    def test_result_is_an_inverse(self):
        rng = np.random.default_rng(42)
        a = rng.random((6, 6)) + np.eye(6) * 3.0
        holder = cachematrix.make_cache_matrix(a)

        inv = cachematrix.cache_solve(holder)
        np.testing.assert_allclose(a @ inv, np.eye(6), atol=1e-10)

    def test_options_reach_inverter_only_on_miss(self):
        holder = cachematrix.CachedMatrix(self.m)

        cachematrix.cache_solve(holder, inverter=self.inverter, tol=1e-8)
        cachematrix.cache_solve(holder, inverter=self.inverter, tol=0.5)

        self.assertEqual(self.inverter.calls, [{"tol": 1e-8}])

    def test_options_are_forwarded_to_default_inverter(self):
        holder = cachematrix.CachedMatrix(np.diag([1.0, 1e-10]))

        with self.assertRaises(cachematrix.SingularMatrixError):
            cachematrix.cache_solve(holder, tol=1e-6)
        self.assertEqual(holder.state, cachematrix.EMPTY)

        inv = cachematrix.cache_solve(holder)
        np.testing.assert_allclose(inv, np.diag([1.0, 1e10]))

    def test_singular_failure_is_not_cached(self):
        holder = cachematrix.CachedMatrix([[1.0, 2.0], [2.0, 4.0]])

        for _ in range(2):
            with self.assertRaises(cachematrix.SingularMatrixError):
                cachematrix.cache_solve(holder, inverter=self.inverter)
            self.assertIsNone(holder.get_cached_inverse())

        self.assertEqual(len(self.inverter.calls), 2)

    def test_non_square_raises_dimension_error(self):
        holder = cachematrix.CachedMatrix([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        with self.assertRaises(cachematrix.DimensionError):
            cachematrix.cache_solve(holder)
        self.assertEqual(holder.state, cachematrix.EMPTY)

    def test_unset_matrix_raises_dimension_error(self):
        holder = cachematrix.CachedMatrix()
        with self.assertRaises(cachematrix.DimensionError):
            cachematrix.cache_solve(holder)

    def test_inverter_errors_propagate_unchanged(self):
        boom = RuntimeError("backend down")

        def failing(matrix, **options):
            raise boom

        holder = cachematrix.CachedMatrix(self.m)
        with self.assertRaises(RuntimeError) as ctx:
            cachematrix.cache_solve(holder, inverter=failing)
        self.assertIs(ctx.exception, boom)
        self.assertFalse(holder.has_cached_inverse)

    def test_diagnostics_distinguish_hit_and_miss(self):
        holder = cachematrix.CachedMatrix(self.m)

        with self.assertLogs("cachematrix", level=logging.DEBUG) as logs:
            cachematrix.cache_solve(holder)
            cachematrix.cache_solve(holder)

        messages = [record.getMessage() for record in logs.records]
        self.assertEqual(messages, ["calculating inverse", "getting cached data"])


if __name__ == "__main__":
    unittest.main()

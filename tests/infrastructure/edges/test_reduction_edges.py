import unittest
from unittest import TestCase

import numpy as np

from edgegrad.domain._errors import ArityError, ShapeError
from edgegrad.infrastructure._evaluate import backward, forward
from edgegrad.infrastructure.edges import KMHNGram, Sum, SumColumns
from edgegrad.infrastructure.utils import gradcheck


class TestSumColumns(TestCase):
    def setUp(self):
        np.random.seed(0)

    def test_forward(self):
        x = np.array([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])
        fx, _ = forward(SumColumns(), [x])
        np.testing.assert_array_equal(fx, [[6.0], [15.0]])

    def test_backward_replicates(self):
        x = np.random.randn(2, 3)
        fx, ctx = forward(SumColumns(), [x])
        dx = backward(SumColumns(), ctx, [x], fx, np.array([[1.0], [2.0]]), 0)
        np.testing.assert_array_equal(dx, [[1.0, 1.0, 1.0], [2.0, 2.0, 2.0]])
        self.assertTrue(dx.flags.writeable)

    def test_requires_matrix(self):
        with self.assertRaises(ShapeError):
            forward(SumColumns(), [np.zeros(3)])

    def test_gradcheck(self):
        self.assertTrue(gradcheck(SumColumns(), [np.random.randn(3, 4)], 0).passed())


class TestSum(TestCase):
    def setUp(self):
        np.random.seed(0)

    def test_forward(self):
        xs = [np.random.randn(3, 2) for _ in range(4)]
        fx, _ = forward(Sum(), xs)
        np.testing.assert_allclose(fx, sum(xs))

    def test_single_input_is_copied(self):
        x = np.random.randn(3, 1)
        fx, _ = forward(Sum(), [x])
        np.testing.assert_array_equal(fx, x)
        self.assertFalse(np.shares_memory(fx, x))

    def test_backward_is_identity_for_every_input(self):
        xs = [np.random.randn(3, 1) for _ in range(3)]
        fx, ctx = forward(Sum(), xs)
        g = np.random.randn(3, 1)
        for i in range(3):
            np.testing.assert_array_equal(backward(Sum(), ctx, xs, fx, g, i), g)

    def test_errors(self):
        with self.assertRaises(ArityError):
            forward(Sum(), [])
        with self.assertRaises(ShapeError):
            forward(Sum(), [np.zeros((2, 1)), np.zeros((3, 1))])

    def test_gradcheck(self):
        xs = [np.random.randn(2, 2) for _ in range(3)]
        for i in range(3):
            self.assertTrue(gradcheck(Sum(), xs, i).passed())


class TestKMHNGram(TestCase):
    def setUp(self):
        np.random.seed(0)

    def test_width_must_be_integral(self):
        with self.assertRaises(TypeError):
            KMHNGram(n=2.0)
        edge = KMHNGram(n=np.int64(2))
        self.assertIs(type(edge.n), int)
        fx, _ = forward(edge, [np.random.randn(3, 4)])
        self.assertEqual(fx.shape, (3, 3))

    def test_forward(self):
        x = np.array([[1.0, 2.0, 3.0, 4.0], [0.0, 1.0, 0.0, 1.0]])
        fx, _ = forward(KMHNGram(n=2), [x])
        np.testing.assert_array_equal(fx, [[3.0, 5.0, 7.0], [1.0, 1.0, 1.0]])

        fx3, _ = forward(KMHNGram(n=3), [x])
        np.testing.assert_array_equal(fx3, [[6.0, 9.0], [1.0, 2.0]])

    def test_width_one_is_identity(self):
        x = np.random.randn(2, 3)
        fx, _ = forward(KMHNGram(n=1), [x])
        np.testing.assert_array_equal(fx, x)

    def test_backward_accumulates_overlaps(self):
        x = np.zeros((1, 4))
        fx, ctx = forward(KMHNGram(n=2), [x])
        dx = backward(KMHNGram(n=2), ctx, [x], fx, np.ones_like(fx), 0)
        np.testing.assert_array_equal(dx, [[1.0, 2.0, 2.0, 1.0]])

    def test_errors(self):
        with self.assertRaises(ValueError):
            KMHNGram(n=0)
        with self.assertRaises(ShapeError):
            forward(KMHNGram(n=5), [np.zeros((2, 4))])

    def test_gradcheck(self):
        x = np.random.randn(3, 5)
        for n in (1, 2, 5):
            with self.subTest(n=n):
                self.assertTrue(gradcheck(KMHNGram(n=n), [x], 0).passed())


if __name__ == "__main__":
    unittest.main()

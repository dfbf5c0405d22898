import unittest
from unittest import TestCase

import numpy as np

from edgegrad.domain._errors import (
    ArityError,
    NotDifferentiableError,
    ShapeError,
    UnsupportedOperationError,
)
from edgegrad.infrastructure._context import Context
from edgegrad.infrastructure._evaluate import backward, forward
from edgegrad.infrastructure.edges import (
    CwiseMultiply,
    InnerProduct3D_1D,
    MatrixMultiply,
    Multilinear,
    SquaredEuclideanDistance,
)
from edgegrad.infrastructure.utils import gradcheck


class TestMatrixMultiply(TestCase):
    def setUp(self):
        np.random.seed(0)

    def test_forward(self):
        a, b = np.random.randn(3, 4), np.random.randn(4, 2)
        fx, _ = forward(MatrixMultiply(), [a, b])
        np.testing.assert_allclose(fx, a @ b)

    def test_inner_dimension_mismatch(self):
        with self.assertRaises(ShapeError):
            forward(MatrixMultiply(), [np.zeros((3, 4)), np.zeros((3, 2))])

    def test_backward(self):
        a, b = np.random.randn(3, 4), np.random.randn(4, 2)
        fx, ctx = forward(MatrixMultiply(), [a, b])
        g = np.random.randn(3, 2)
        np.testing.assert_allclose(backward(MatrixMultiply(), ctx, [a, b], fx, g, 0), g @ b.T)
        np.testing.assert_allclose(backward(MatrixMultiply(), ctx, [a, b], fx, g, 1), a.T @ g)

    def test_gradcheck(self):
        xs = [np.random.randn(2, 3), np.random.randn(3, 4)]
        for i in range(2):
            self.assertTrue(gradcheck(MatrixMultiply(), xs, i).passed())


class TestCwiseMultiply(TestCase):
    def setUp(self):
        np.random.seed(0)

    def test_forward_and_errors(self):
        a, b = np.random.randn(3, 2), np.random.randn(3, 2)
        fx, _ = forward(CwiseMultiply(), [a, b])
        np.testing.assert_allclose(fx, a * b)
        with self.assertRaises(ShapeError):
            forward(CwiseMultiply(), [a, np.zeros((2, 3))])

    def test_gradcheck(self):
        xs = [np.random.randn(3, 2), np.random.randn(3, 2)]
        for i in range(2):
            self.assertTrue(gradcheck(CwiseMultiply(), xs, i).passed())


class TestMultilinear(TestCase):
    def setUp(self):
        np.random.seed(0)

    def test_bias_only(self):
        b = np.random.randn(3, 1)
        fx, _ = forward(Multilinear(), [b])
        np.testing.assert_array_equal(fx, b)
        self.assertFalse(np.shares_memory(fx, b))

    def test_forward(self):
        b = np.random.randn(3, 1)
        a1, x1 = np.random.randn(3, 4), np.random.randn(4, 1)
        a2, x2 = np.random.randn(3, 2), np.random.randn(2, 1)
        fx, _ = forward(Multilinear(), [b, a1, x1, a2, x2])
        np.testing.assert_allclose(fx, b + a1 @ x1 + a2 @ x2)

    def test_diagonal_shorthand(self):
        b = np.random.randn(3, 1)
        d, x = np.random.randn(3, 1), np.random.randn(3, 1)
        fx, ctx = forward(Multilinear(), [b, d, x])
        np.testing.assert_allclose(fx, b + d * x)

        g = np.random.randn(3, 1)
        xs = [b, d, x]
        np.testing.assert_allclose(backward(Multilinear(), ctx, xs, fx, g, 1), g * x)
        np.testing.assert_allclose(backward(Multilinear(), ctx, xs, fx, g, 2), g * d)

    def test_errors(self):
        b = np.zeros((3, 1))
        with self.assertRaises(ArityError):
            forward(Multilinear(), [])
        with self.assertRaises(ArityError):
            forward(Multilinear(), [b, np.zeros((3, 3))])
        with self.assertRaises(ShapeError):
            forward(Multilinear(), [b, np.zeros((2, 4)), np.zeros((4, 1))])
        with self.assertRaises(ShapeError):
            forward(Multilinear(), [b, np.zeros((3, 4)), np.zeros((5, 1))])

    def test_gradcheck(self):
        xs = [
            np.random.randn(3, 2),
            np.random.randn(3, 4),
            np.random.randn(4, 2),
            np.random.randn(3, 3),
            np.random.randn(3, 2),
        ]
        for i in range(len(xs)):
            with self.subTest(i=i):
                self.assertTrue(gradcheck(Multilinear(), xs, i).passed())

    def test_gradcheck_diagonal(self):
        xs = [np.random.randn(4, 1), np.random.randn(4, 1), np.random.randn(4, 1)]
        for i in range(3):
            self.assertTrue(gradcheck(Multilinear(), xs, i).passed())


class TestSquaredEuclideanDistance(TestCase):
    def setUp(self):
        np.random.seed(0)

    def test_forward(self):
        a = np.array([[1.0], [2.0]])
        b = np.array([[4.0], [6.0]])
        fx, _ = forward(SquaredEuclideanDistance(), [a, b])
        np.testing.assert_array_equal(fx, [[25.0]])

    def test_backward_is_antisymmetric(self):
        a, b = np.random.randn(3, 1), np.random.randn(3, 1)
        edge = SquaredEuclideanDistance()
        fx, ctx = forward(edge, [a, b])
        g = np.array([[0.5]])
        da = backward(edge, ctx, [a, b], fx, g, 0)
        db = backward(edge, ctx, [a, b], fx, g, 1)
        np.testing.assert_allclose(da, a - b)
        np.testing.assert_allclose(db, -(a - b))

    def test_errors(self):
        with self.assertRaises(ShapeError):
            forward(SquaredEuclideanDistance(), [np.zeros((3, 1)), np.zeros((2, 1))])

    def test_gradcheck(self):
        xs = [np.random.randn(4, 2), np.random.randn(4, 2)]
        for i in range(2):
            self.assertTrue(gradcheck(SquaredEuclideanDistance(), xs, i).passed())


class TestInnerProduct3D_1D(TestCase):
    def test_is_not_supported(self):
        edge = InnerProduct3D_1D()
        a, b = np.zeros((2, 3, 4)), np.zeros((4, 1))
        with self.assertRaises(UnsupportedOperationError):
            forward(edge, [a, b])
        with self.assertRaises(NotDifferentiableError):
            edge.backward(Context(), [a, b], np.zeros((2, 3)), np.zeros((2, 3)), 0)

    def test_reports_no_differentiable_inputs(self):
        edge = InnerProduct3D_1D()
        self.assertFalse(edge.differentiable(0))
        self.assertFalse(edge.differentiable(1))

    def test_arity_is_still_enforced(self):
        with self.assertRaises(ArityError):
            forward(InnerProduct3D_1D(), [np.zeros((2, 3, 4))])


if __name__ == "__main__":
    unittest.main()

import typing
import unittest
from unittest import TestCase

import numpy as np

import edgegrad
from edgegrad.domain._edge import Edge
from edgegrad.infrastructure import edges
from edgegrad.infrastructure.edges import AnyEdge


class TestEdgeCatalog(TestCase):
    def test_catalog_is_closed_union_of_edges(self):
        members = typing.get_args(AnyEdge)
        self.assertEqual(len(members), 31)
        self.assertEqual(len(set(members)), 31)
        for cls in members:
            self.assertTrue(issubclass(cls, Edge), cls)

    def test_all_exports_every_catalog_member(self):
        names = set(edges.__all__) - {"AnyEdge"}
        self.assertEqual(names, {cls.__name__ for cls in typing.get_args(AnyEdge)})

    def test_package_reexports(self):
        for name in edges.__all__:
            self.assertIs(getattr(edgegrad, name), getattr(edges, name))
        for name in ("forward", "backward", "Context", "gradcheck", "Dim", "EdgeError"):
            self.assertTrue(hasattr(edgegrad, name), name)

    def test_arity_is_not_a_dataclass_field(self):
        import dataclasses

        for cls in typing.get_args(AnyEdge):
            names = {f.name for f in dataclasses.fields(cls)}
            self.assertNotIn("arity", names, cls.__name__)

    def test_edges_are_hashable_configuration(self):
        a = edgegrad.Hinge(index=1, margin=2.0)
        b = edgegrad.Hinge(index=1, margin=2.0)
        self.assertEqual(a, b)
        self.assertEqual(len({a, b, edgegrad.Hinge(index=0)}), 2)

    def test_dispatch_by_class(self):
        def describe(edge: AnyEdge) -> str:
            match edge:
                case edgegrad.Tanh():
                    return "activation"
                case edgegrad.Dropout(p=p):
                    return f"dropout {p}"
                case _:
                    return "other"

        self.assertEqual(describe(edgegrad.Tanh()), "activation")
        self.assertEqual(describe(edgegrad.Dropout(p=0.5)), "dropout 0.5")
        self.assertEqual(describe(edgegrad.Sum()), "other")

    def test_backward_output_never_aliases_inputs(self):
        np.random.seed(0)
        x = np.random.randn(4, 1)
        for edge in (edgegrad.Identity(), edgegrad.Sum(), edgegrad.GaussianNoise(stddev=0.0)):
            fx, ctx = edgegrad.forward(edge, [x])
            g = np.ones_like(fx)
            dx = edgegrad.backward(edge, ctx, [x], fx, g, 0)
            self.assertFalse(np.shares_memory(dx, g))
            self.assertFalse(np.shares_memory(fx, x))


if __name__ == "__main__":
    unittest.main()

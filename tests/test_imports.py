import importlib
import pytest

@pytest.mark.parametrize("module", [
    "eigensim",
    "eigensim.base",
    "eigensim.spectrum",
    "eigensim.sampling",
    "eigensim.estimator",
    "eigensim.simulator",
    "eigensim.utils",
    "eigensim.visualization",
])
def test_submodules_exist(module):
    mod = importlib.import_module(module)
    assert mod is not None


def test_public_names_exported():
    import eigensim

    for name in eigensim.__all__:
        assert hasattr(eigensim, name), f"eigensim.{name} should exist"

import pytest

from prefnet.model import Assignment, OptimalExample, PreferenceSpecification


def A(**kw):
    return Assignment(kw)


@pytest.fixture
def two_var_net():
    # A: T > F;  B: T > F given A=T, F > T given A=F
    net = PreferenceSpecification(["A", "B"])
    net.add_preference("A", A(), True)
    net.add_preference("B", A(A=True), True)
    net.add_preference("B", A(A=False), False)
    return net


@pytest.fixture
def two_var_examples():
    return [
        OptimalExample(A(), A(A=True, B=True)),
        OptimalExample(A(A=False), A(A=False, B=False)),
    ]


@pytest.fixture
def outcomes():
    return {
        "TT": A(A=True, B=True),
        "TF": A(A=True, B=False),
        "FT": A(A=False, B=True),
        "FF": A(A=False, B=False),
    }

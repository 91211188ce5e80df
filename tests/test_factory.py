import pytest
import springlaws


@pytest.mark.parametrize("name", springlaws.spring_names())
def test_factory(name):
    """
    Check whether each name known to the factory gives a spring function
    with the same name and default constants.
    """
    spring = springlaws.spring_factory(name)
    assert isinstance(spring, springlaws.SpringFunction)
    assert spring.name == name
    assert spring.params == type(spring)().params
    assert spring.valid_params()


def test_spring_names():
    assert springlaws.spring_names() == [
        "DistanceCutoff", "DistanceWeight", "ExponentialDistance",
        "HCA", "ConstBonded"
    ]


@pytest.mark.parametrize("name", ["not-a-real-name", "hca", "", "HCA "])
def test_unknown_name(name):
    with pytest.raises(springlaws.BadSpringFunction, match=f"'{name}'"):
        springlaws.spring_factory(name)


def test_independent_instances():
    spring1 = springlaws.spring_factory("DistanceCutoff")
    spring2 = springlaws.spring_factory("DistanceCutoff")
    assert spring1 is not spring2
    spring1.set_params([7.0])
    assert spring1.params == {"radius": 7.0}
    assert spring2.params == {"radius": 15.0}


def test_registry_read_only():
    with pytest.raises(TypeError):
        springlaws.SPRING_FUNCTIONS["Foo"] = springlaws.HCA


def test_named_params():
    spring = springlaws.spring_factory("HCA", rcut=3.5, d=5.0)
    assert spring.params == {
        "rcut": 3.5, "a": 205.5, "b": 571.2, "c": 305.9e3, "d": 5.0
    }


def test_unknown_named_param():
    with pytest.raises(springlaws.BadSpringParameter, match="cutoff"):
        springlaws.spring_factory("DistanceCutoff", cutoff=7.0)


def test_chain():
    """
    Check whether chained spring functions take their parameters from
    the end of the sequence in reverse order.
    """
    springs = springlaws.spring_chain(
        ["DistanceCutoff", "HCA", "ConstBonded"],
        [7.0, 1.0, 2.0, 3.0, 4.0, 5.0, 10.0]
    )
    assert [spring.name for spring in springs] == [
        "DistanceCutoff", "HCA", "ConstBonded"
    ]
    assert springs[0].params == {"radius": 7.0}
    assert springs[1].params == {
        "rcut": 1.0, "a": 2.0, "b": 3.0, "c": 4.0, "d": 5.0
    }
    assert springs[2].params == {"scale": 10.0}


def test_chain_insufficient_params():
    with pytest.raises(springlaws.BadSpringParameter):
        springlaws.spring_chain(["DistanceCutoff", "HCA"], [1.0, 2.0, 3.0])


def test_chain_leftover_params():
    with pytest.raises(springlaws.BadSpringParameter, match="1 spring"):
        springlaws.spring_chain(["DistanceWeight"], [1.0, -2.0])


def test_chain_unknown_name():
    with pytest.raises(springlaws.BadSpringFunction):
        springlaws.spring_chain(["DistanceWeight", "Foo"], [-2.0, 1.0])

"""
Pytest configuration and fixtures for traversal engine tests.

The shared model is a small finite state machine:

    s0 --t01--> s1 --t12--> s2 --t23--> s3 (final)
    ^                        |
    +---------t20------------+
"""

import pytest
from pathlib import Path
from types import SimpleNamespace
import sys

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from modelcrawl.metamodel.elements import Cardinality, Model, ModelClass


@pytest.fixture(scope="session")
def fsm_metamodel():
    """State machine classes"""
    state = ModelClass("State")
    final_state = ModelClass("FinalState", superclasses=[state])
    transition = ModelClass("Transition")
    machine = ModelClass("StateMachine")

    state.add_reference("transition", transition, Cardinality.MANY)
    transition.add_reference("next", state, Cardinality.ONE)
    machine.add_reference("states", state, Cardinality.MANY)
    machine.add_reference("initial", state, Cardinality.ONE)

    return SimpleNamespace(
        State=state,
        FinalState=final_state,
        Transition=transition,
        StateMachine=machine,
    )


@pytest.fixture(scope="function")
def fsm(fsm_metamodel):
    """A fresh state machine instance for each test"""
    mm = fsm_metamodel
    s0 = mm.State.new_instance("s0")
    s1 = mm.State.new_instance("s1")
    s2 = mm.State.new_instance("s2")
    s3 = mm.FinalState.new_instance("s3")

    t01 = mm.Transition.new_instance("t01", next=s1)
    t12 = mm.Transition.new_instance("t12", next=s2)
    t23 = mm.Transition.new_instance("t23", next=s3)
    t20 = mm.Transition.new_instance("t20", next=s0)

    s0.add_reference("transition", t01)
    s1.add_reference("transition", t12)
    s2.add_reference("transition", t23)
    s2.add_reference("transition", t20)

    machine = mm.StateMachine.new_instance("fsm", states=[s0, s1, s2, s3], initial=s0)

    return SimpleNamespace(
        machine=machine,
        s0=s0, s1=s1, s2=s2, s3=s3,
        t01=t01, t12=t12, t23=t23, t20=t20,
    )


@pytest.fixture
def fsm_model(fsm_metamodel, fsm):
    """The state machine elements wrapped in a model with a reference model attached"""
    mm = fsm_metamodel
    metamodel = Model("FSM-MM", elements=[mm.State, mm.FinalState, mm.Transition, mm.StateMachine])
    return Model(
        "fsm",
        reference_model=metamodel,
        elements=[fsm.s0, fsm.s1, fsm.s2, fsm.s3, fsm.t01, fsm.t12, fsm.t23, fsm.t20]
    )


@pytest.fixture(scope="session")
def node_class():
    """Untyped graph node with a single self-referencing 'edges' reference"""
    node = ModelClass("Node")
    node.add_reference("edges")
    return node


@pytest.fixture(scope="session")
def profiles_path():
    """Bundled traversal profiles"""
    return Path(__file__).parent.parent / "config" / "profiles.yaml"


def always(_obj):
    return True


def names(objects):
    return [obj.name for obj in objects]

import json

import pytest

from bfcore.config import EngineConfig
from bfcore.session import DebugSession
from bfcore.status import ExecutionStatus


def test_load_code_replies():
    session = DebugSession()
    assert session.load_code("+.") == "Code loaded. Engine reset."
    assert session.load_code("+[") == "Parser Error: Unmatched '[' at index 1"
    assert session.engine.status is ExecutionStatus.PARSER_ERROR


def test_load_code_builds_fresh_engine_with_bounds():
    session = DebugSession()
    session.load_code("+[+]", tape_size=1, min_value=-10, max_value=10)
    assert session.engine.tape_size == 1
    assert session.run() == "Status: OVERFLOW_ERROR\nPointer at [0]: 10"


def test_load_code_falls_back_to_session_config():
    session = DebugSession(EngineConfig(tape_size=5))
    session.load_code("<", tape_size=None)
    session.run()
    assert session.engine.data_pointer == 4


def test_step_summary():
    session = DebugSession()
    session.load_code("+++")
    assert session.step(2) == "Status: RUNNING\nPointer at [0]: 2"
    assert session.step() == "Status: RUNNING\nPointer at [0]: 3"
    assert session.step() == 'Program Finished in 3 steps.\nOutput: ""\nPointer at [0]: 3'


def test_step_count_must_be_positive():
    session = DebugSession()
    session.load_code("+")
    with pytest.raises(ValueError):
        session.step(0)
    with pytest.raises(ValueError):
        session.run(0)


def test_run_pauses_for_input_and_resumes(io_program):
    session = DebugSession()
    session.load_code(io_program)
    reply = session.run()
    assert reply.startswith("PAUSED: Waiting for Input at step 1.")
    assert 'Output so far: ""' in reply

    assert session.add_input("\n") == "Input added. Status: RUNNING"
    session.run()
    session.add_input("\n")
    reply = session.run()
    assert reply.startswith("Program Finished in")
    assert session.read_output() == "LL\nLL\n"


def test_run_with_limit():
    session = DebugSession()
    session.load_code("+[]")
    assert session.run(limit=50).startswith("Status: RUNNING")
    assert session.engine.total_steps == 50


def test_hello_world_output(hello_world):
    session = DebugSession()
    session.load_code(hello_world)
    reply = session.run()
    assert reply.startswith("Program Finished in ")
    assert session.read_output() == "Hello World!\n"


def test_get_state_json():
    session = DebugSession(EngineConfig(tape_size=20))
    session.load_code(">>+", initial_input="xy")
    session.run()
    data = json.loads(session.get_state(window_radius=1))
    assert data["status"] == "FINISHED"
    assert data["data_pointer"] == 2
    assert data["tape_window"] == [0, 1, 0]
    assert data["tape_window_start_index"] == 1
    assert data["input_buffer_length"] == 2
    assert "xy" not in session.get_state()


def test_add_input_while_running():
    session = DebugSession()
    session.load_code(",")
    assert session.add_input("a") == "Input added. Status: RUNNING"


def test_add_empty_input_while_waiting():
    session = DebugSession()
    session.load_code(",.")
    session.run()
    assert session.add_input("") == "Input added. Status: RUNNING"
    assert session.run().startswith("PAUSED: Waiting for Input at step 0.")

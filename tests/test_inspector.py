import json

from brainfuck import BrainfuckEngine, ExecutionStatus


def test_snapshot_fields_mid_run():
    engine = BrainfuckEngine(tape_size=10)
    engine.load(">>+++.,", "abc")
    engine.step(6)
    state = engine.get_state(window_radius=1)

    assert state.status is ExecutionStatus.RUNNING
    assert state.instruction_pointer == 6
    assert state.data_pointer == 2
    assert state.tape_window == [0, 3, 0]
    assert state.tape_window_start_index == 1
    assert state.output == chr(3)
    assert state.input_buffer_length == 3
    assert state.next_instruction == ","
    assert state.total_steps == 6
    assert state.current_cell == 3


def test_window_clamped_at_tape_start():
    engine = BrainfuckEngine(tape_size=10)
    engine.load("+")
    engine.run()
    state = engine.get_state(window_radius=3)
    assert state.tape_window_start_index == 0
    assert state.tape_window == [1, 0, 0, 0]


def test_window_does_not_wrap_at_tape_end():
    engine = BrainfuckEngine(tape_size=10)
    engine.load("<+")
    engine.run()
    state = engine.get_state(window_radius=3)
    assert state.tape_window_start_index == 6
    assert state.tape_window == [0, 0, 0, 1]
    assert state.current_cell == 1


def test_full_tape_without_radius():
    engine = BrainfuckEngine(tape_size=50)
    state = engine.get_state()
    assert len(state.tape_window) == 50
    assert state.tape_window_start_index == 0


def test_snapshot_is_detached_from_engine():
    engine = BrainfuckEngine(tape_size=3)
    engine.load("++")
    engine.step(1)
    state = engine.get_state()
    engine.step(1)
    assert state.tape_window == [1, 0, 0]
    assert state.total_steps == 1


def test_snapshot_does_not_mutate():
    engine = BrainfuckEngine()
    engine.load(",.", "x")
    first = engine.get_state(window_radius=2)
    second = engine.get_state(window_radius=2)
    assert first == second
    assert engine.status is ExecutionStatus.RUNNING


def test_end_of_program_marker():
    engine = BrainfuckEngine()
    engine.load("+")
    engine.run()
    assert engine.get_state(window_radius=0).next_instruction == "EOF"


def test_to_json():
    engine = BrainfuckEngine(tape_size=4)
    engine.load("+.")
    engine.run()
    data = json.loads(engine.get_state(window_radius=1).to_json())
    assert data == {
        "status": "FINISHED",
        "instruction_pointer": 2,
        "data_pointer": 0,
        "tape_window": [1, 0],
        "tape_window_start_index": 0,
        "output": chr(1),
        "input_buffer_length": 0,
        "next_instruction": "EOF",
        "total_steps": 2,
    }

import pytest

HELLO_WORLD = (
    "++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
    ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++."
)

IO_PROGRAM = ">,>+++++++++,>+++++++++++[<++++++<++++++<+>>>-]<<.>.<<-.>.>.<<."


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep BF_* settings from the developer's shell out of the tests."""
    for key in ("BF_TAPE_SIZE", "BF_MIN_VALUE", "BF_MAX_VALUE", "BF_STEP_LIMIT", "BF_TRACE"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def hello_world():
    return HELLO_WORLD


@pytest.fixture
def io_program():
    return IO_PROGRAM

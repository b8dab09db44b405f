from pathlib import Path

from streamlit.testing.v1 import AppTest

APP_FILE = str(Path(__file__).resolve().parents[1] / "app.py")


def run_app():
    at = AppTest.from_file(APP_FILE, default_timeout=30)
    return at.run()


def metrics(at):
    return {m.label: m.value for m in at.metric}


def test_starts_without_result():
    at = run_app()

    assert not at.exception
    assert at.session_state["result"] is None
    assert at.sidebar.text_input(key="reference_string").value == "1,2,3,4,1,2,5,1,2,3,4,5"


def test_run_simulation_shows_statistics():
    at = run_app()
    at.sidebar.button(key="run").click().run()

    assert not at.exception
    assert metrics(at)["Page Faults"] == "9"
    assert metrics(at)["Page Hits"] == "3"
    assert metrics(at)["Hit Ratio"] == "0.25"
    assert metrics(at)["Fault Ratio"] == "0.75"
    assert at.session_state["result"].fault_count == 9


def test_run_with_lru():
    at = run_app()
    at.sidebar.selectbox(key="policy").set_value("LRU")
    at.sidebar.button(key="run").click().run()

    assert not at.exception
    assert metrics(at)["Page Faults"] == "10"
    assert metrics(at)["Hit Ratio"] == "0.17"


def test_malformed_reference_string_is_rejected():
    at = run_app()
    at.sidebar.text_input(key="reference_string").set_value("1,a,3")
    at.sidebar.button(key="run").click().run()

    assert not at.exception
    assert len(at.error) == 1
    assert "valid reference string" in at.error[0].value
    assert at.session_state["result"] is None


def test_reset_clears_result():
    at = run_app()
    at.sidebar.text_input(key="reference_string").set_value("1,2,1")
    at.sidebar.button(key="run").click().run()
    assert at.session_state["result"] is not None

    at.sidebar.button(key="reset").click().run()

    assert at.session_state["result"] is None
    assert at.sidebar.text_input(key="reference_string").value == "1,2,3,4,1,2,5,1,2,3,4,5"


def test_concepts_view():
    at = run_app()
    at.sidebar.radio(key="view").set_value("Concepts").run()

    assert not at.exception
    assert any("Belady" in md.value for md in at.markdown)


def test_inputs_survive_concepts_view():
    at = run_app()
    at.sidebar.text_input(key="reference_string").set_value("4,5,4")
    at.sidebar.number_input(key="frames").set_value(2)
    at.sidebar.selectbox(key="policy").set_value("OPT").run()

    at.sidebar.radio(key="view").set_value("Concepts").run()
    at.sidebar.radio(key="view").set_value("Simulator").run()

    assert not at.exception
    assert at.sidebar.text_input(key="reference_string").value == "4,5,4"
    assert at.sidebar.number_input(key="frames").value == 2
    assert at.sidebar.selectbox(key="policy").value == "OPT"


def test_animate_and_stop():
    at = run_app()
    at.sidebar.text_input(key="reference_string").set_value("1,2,1")
    at.sidebar.slider(key="speed").set_value(5.0)
    at.sidebar.button(key="run").click().run()

    at.sidebar.button(key="animate").click().run()

    assert not at.exception
    assert len(at.table[0].value) == 3

    at.sidebar.button(key="stop").click().run()

    assert not at.exception
    assert at.session_state["result"].hit_count == 1
    assert len(at.table[0].value) == 3

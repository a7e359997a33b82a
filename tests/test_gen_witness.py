"""Tests for the gen_witness command line entry point."""

import json

from gen_witness import main


class TestGenWitness:
    """Tests for witness file generation."""

    def test_writes_witness(self, addition_wasm, tmp_path) -> None:
        circuit = tmp_path / "circuit.wasm"
        circuit.write_bytes(addition_wasm)
        inputs = tmp_path / "input.json"
        inputs.write_text(json.dumps({"a": "3", "b": ["5"]}))
        output = tmp_path / "witness.json"

        assert main([str(circuit), str(inputs), "-o", str(output)]) == 0
        assert json.loads(output.read_text()) == ["1", "8", "3", "5"]

    def test_precompile_then_run(self, addition_wasm, tmp_path) -> None:
        circuit = tmp_path / "circuit.wasm"
        circuit.write_bytes(addition_wasm)
        artifact = tmp_path / "circuit.cwasm"
        assert main([str(circuit), "--precompile-to", str(artifact)]) == 0
        assert artifact.exists()

        inputs = tmp_path / "input.json"
        inputs.write_text(json.dumps({"a": 1, "b": 1}))
        output = tmp_path / "witness.json"
        assert main([str(artifact), str(inputs), "--precompiled", "-o", str(output)]) == 0
        assert json.loads(output.read_text())[1] == "2"

    def test_guest_error_exit_code(self, addition_wasm, tmp_path, capsys) -> None:
        circuit = tmp_path / "circuit.wasm"
        circuit.write_bytes(addition_wasm)
        inputs = tmp_path / "input.json"
        inputs.write_text(json.dumps({"nope": 1}))

        assert main([str(circuit), str(inputs)]) == 2
        assert "GuestTrapError" in capsys.readouterr().err

    def test_bad_input_exit_code(self, addition_wasm, tmp_path, capsys) -> None:
        circuit = tmp_path / "circuit.wasm"
        circuit.write_bytes(addition_wasm)
        inputs = tmp_path / "input.json"
        inputs.write_text(json.dumps({"a": "xyz"}))

        assert main([str(circuit), str(inputs)]) == 2
        assert "InputParseError" in capsys.readouterr().err

    def test_malformed_input_file(self, addition_wasm, tmp_path, capsys) -> None:
        circuit = tmp_path / "circuit.wasm"
        circuit.write_bytes(addition_wasm)
        inputs = tmp_path / "input.json"
        inputs.write_text("[1, 2")

        assert main([str(circuit), str(inputs)]) == 2
        assert "invalid JSON" in capsys.readouterr().err

    def test_missing_circuit(self, tmp_path) -> None:
        assert main([str(tmp_path / "absent.wasm"), str(tmp_path / "input.json")]) == 1

"""Pytest plugin and engine for parameterized golden file tests.

The `pytest_platina` package reads plain-text golden files holding many
labeled test cases, feeds every case to a test callback, and either
verifies the computed outputs against the recorded ones or rewrites the
file with the computed outputs.

Key features:
- a simple bracketed golden file format with verbatim multi-line bodies;
- lossless rewriting: only changed parameter bodies are touched;
- aggregated reports listing every failing case in a single run;
- a `platina` pytest fixture and a `--platina-update` option.
"""

"""
Shared fixtures for JSX Splitter tests.
"""

import pytest

from jsxsplitter.analysis.oracle import TreeSitterOracle
from jsxsplitter.refactoring.code_generator import ComponentCodeGenerator
from jsxsplitter.workspace import FixedNamePrompt, LocalFileSystem


APP_SOURCE = """import React from 'react';
import {Foo, Bar} from './foo';

const App = ({title}) => (
  <div>
    <Foo label={title}/>
    <Bar/>
  </div>
);

export default App;
"""


@pytest.fixture(scope="session")
def oracle():
    """Tree-sitter oracle shared by all tests (it holds no per-call state)."""
    return TreeSitterOracle()


@pytest.fixture
def generator(oracle):
    return ComponentCodeGenerator(oracle)


@pytest.fixture
def app_source():
    return APP_SOURCE


@pytest.fixture
def app_file(tmp_path):
    """An App.js file in a temporary workspace."""
    path = tmp_path / "App.js"
    path.write_text(APP_SOURCE, encoding="utf-8")
    return path


@pytest.fixture
def workspace(tmp_path):
    return LocalFileSystem(tmp_path)


@pytest.fixture
def name_prompt():
    def _make(name):
        return FixedNamePrompt(name)

    return _make

"""Pytest configuration and shared fixtures."""

import json
import tempfile
from pathlib import Path

import pytest

from narrato.models.analysis import SourceFile

SAMPLE_PYTHON = '''
import os
from services.user import UserService


def hello_world():
    """Say hello."""
    print("Hello, World!")


class UserRepository:
    """Repository for user records."""

    def __init__(self):
        self.users = {}

    def get_user(self, user_id: str):
        if user_id in self.users:
            return self.users[user_id]
        return None


def _private_helper():
    for name in os.listdir("."):
        print(name)
'''

SAMPLE_TYPESCRIPT = '''
import { User } from './models/user';
import * as utils from './utils';

export function greet(name: string): string {
    return `Hello, ${name}!`;
}

export const add = (a: number, b: number): number => {
    return a + b;
};

export class UserService {
    private users: Map<string, User> = new Map();

    getUser(id: string): User | undefined {
        if (this.users.has(id)) {
            return this.users.get(id);
        }
        return undefined;
    }
}

async function fetchData(url: string): Promise<any> {
    const response = await fetch(url);
    return response.json();
}
'''


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_python_file() -> SourceFile:
    """A Python upload with classes, functions, and imports."""
    return SourceFile(name="repository.py", content=SAMPLE_PYTHON)


@pytest.fixture
def sample_typescript_file() -> SourceFile:
    """A TypeScript upload with exports and relative imports."""
    return SourceFile(name="service.ts", content=SAMPLE_TYPESCRIPT)


@pytest.fixture
def sample_package_json() -> SourceFile:
    """A package.json declaring React and Express."""
    return SourceFile(
        name="package.json",
        content=json.dumps(
            {
                "name": "test-project",
                "dependencies": {"react": "^18.0.0", "express": "^4.18.0"},
                "devDependencies": {"jest": "^29.0.0"},
            }
        ),
    )


@pytest.fixture
def sample_uploads() -> list[dict]:
    """Upload payloads for a small mixed project, in upload order."""
    return [
        {"name": "main.py", "content": "from utils import helper\n\ndef main():\n    helper()\n"},
        {"name": "utils.py", "content": "def helper():\n    if True:\n        pass\n"},
        {"name": "requirements.txt", "content": "Flask==2.0.0\npytest\n"},
        {"name": "config.yaml", "content": "debug: true\n"},
    ]


@pytest.fixture
def sample_project_dir(temp_dir: Path) -> Path:
    """Write a small TypeScript project to disk for CLI tests."""
    (temp_dir / "utils.ts").write_text("import { format } from './helpers';\n")
    (temp_dir / "helpers.ts").write_text("export function format() {}\n")
    (temp_dir / "package.json").write_text(json.dumps({"dependencies": {"react": "18"}}))
    return temp_dir

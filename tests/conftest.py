"""Общие фикстуры: изоляция текущего ArithmeticContext между тестами."""

import pytest

from chunkdec import reset_context


@pytest.fixture(autouse=True)
def default_context():
    """Каждый тест стартует и завершается с контекстом по умолчанию."""
    reset_context()
    yield
    reset_context()

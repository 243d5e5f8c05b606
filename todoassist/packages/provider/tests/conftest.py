"""Provider 包测试 fixtures"""

import pytest


@pytest.fixture
def summary_messages() -> list[dict[str, str]]:
    """system + user 两条消息的测试数据"""
    return [
        {"role": "system", "content": "You summarize todo lists."},
        {
            "role": "user",
            "content": "Please summarize this todo list:\n\n- Buy milk\n- Ship release: v2.1 to prod",
        },
    ]

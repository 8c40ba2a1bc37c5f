"""Tests for the storefront screens and actions."""

from __future__ import annotations

import unittest
from unittest.mock import patch

from groupbuy import create_app
from groupbuy.constants import CHAT_CONFIG_ERROR, SESSION_TOKEN_KEY
from groupbuy.group.models import GroupStatus
from tests.helpers import TEST_CONFIG

GROUP_CARD = 'class="group-card"'


class StorefrontRoutesTestCase(unittest.TestCase):
    """Test case for the main and group blueprints."""

    def setUp(self):
        """Set up a test client."""
        self.app = create_app(TEST_CONFIG)
        self.client = self.app.test_client()

    def page(self, method, url, **kwargs):
        response = getattr(self.client, method)(url, follow_redirects=True, **kwargs)
        self.assertEqual(response.status_code, 200)
        return response.get_data(as_text=True)

    def controller(self):
        with self.client.session_transaction() as sess:
            token = sess[SESSION_TOKEN_KEY]
        registry = self.app.extensions["storefront_sessions"]
        return registry.get_or_create(token).controller

    def test_home_lists_seed_groups(self):
        html = self.page("get", "/")
        self.assertEqual(html.count(GROUP_CARD), 2)
        self.assertIn("Alex 的团", html)
        self.assertIn("Sarah 的团", html)
        self.assertIn("¥699", html)
        self.assertIn("原价 ¥1099", html)

    def test_create_group_shows_detail(self):
        html = self.page("post", "/group/create")
        self.assertIn("拼团详情", html)
        self.assertIn("团长", html)
        self.assertIn("还差 <strong>2</strong> 人", html)
        self.assertIn("参与拼团", html)

    def test_back_returns_home_with_new_group(self):
        self.page("post", "/group/create")
        html = self.page("post", "/group/back")
        self.assertEqual(html.count(GROUP_CARD), 3)
        self.assertIn("我 的团", html)

    def test_select_group(self):
        html = self.page("post", "/group/g2/select")
        self.assertIn("拼团详情", html)
        self.assertIn('alt="Sarah"', html)
        self.assertIn('alt="Mike"', html)
        self.assertIn("还差 <strong>1</strong> 人", html)

    def test_select_unknown_group_declines_detail(self):
        html = self.page("post", "/group/nope/select")
        self.assertNotIn("拼团详情", html)
        self.assertIn("拼团不存在或已结束。", html)
        self.assertEqual(html.count(GROUP_CARD), 2)

        html = self.page("post", "/group/g2/select")
        self.assertIn("拼团详情", html)

    def test_join_scenario(self):
        self.page("get", "/")
        self.page("post", "/group/create")
        html = self.page("post", "/group/back")
        self.assertEqual(html.count(GROUP_CARD), 3)

        self.page("post", "/group/g2/select")
        html = self.page("post", "/group/g2/join")
        self.assertIn("报名成功", html)
        self.assertIn("ORD-", html)
        self.assertIn("xy5312630", html)
        self.assertIn("添加时请备注“试听课”", html)

        controller = self.controller()
        self.assertEqual(controller.find_group("g2").status, GroupStatus.FULL)
        open_ids = [g.id for g in controller.open_groups()]
        self.assertEqual(len(open_ids), 2)
        self.assertNotIn("g2", open_ids)

    def test_success_is_stable_across_reloads(self):
        self.page("post", "/group/g1/select")
        first = self.page("post", "/group/g1/join")
        second = self.page("get", "/")
        order_id = self.controller().confirmation.order_id
        self.assertIn(order_id, first)
        self.assertIn(order_id, second)

    def test_reset_discards_session(self):
        self.page("post", "/group/create")
        self.page("post", "/group/back")
        html = self.page("post", "/reset")
        self.assertEqual(html.count(GROUP_CARD), 2)
        self.assertNotIn("我 的团", html)

    def test_group_state_json(self):
        self.client.get("/")
        response = self.client.get("/group/g2")
        self.assertEqual(response.status_code, 200)
        data = response.get_json()["data"]
        self.assertEqual(data["members"], ["Sarah", "Mike"])
        self.assertEqual(data["missing"], 1)
        self.assertEqual(data["status"], "OPEN")

    def test_group_state_unknown_is_json_404(self):
        response = self.client.get("/group/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(
            response.get_json(),
            {"success": False, "message": "Group nope not found.", "data": None},
        )

    def test_join_from_stale_home_tab_is_ignored(self):
        self.page("post", "/group/g1/select")
        self.page("post", "/group/back")
        html = self.page("post", "/group/g1/join")

        self.assertNotIn("订单编号", html)
        self.assertEqual(html.count(GROUP_CARD), 2)
        self.assertEqual(len(self.controller().find_group("g1").members), 1)

    def test_unknown_page_is_404(self):
        response = self.client.get("/non_existent_page")
        self.assertEqual(response.status_code, 404)


class DelayedJoinRoutesTestCase(unittest.TestCase):
    """Routes with a join delay long enough to observe the wait."""

    def setUp(self):
        """Set up a test client."""
        self.app = create_app({**TEST_CONFIG, "JOIN_REDIRECT_DELAY": 60})
        self.client = self.app.test_client()

    def test_join_waits_on_detail(self):
        self.client.post("/group/g2/select")
        response = self.client.post("/group/g2/join", follow_redirects=True)
        html = response.get_data(as_text=True)
        self.assertIn("拼团成功", html)
        self.assertIn('http-equiv="refresh" content="60.0"', html)
        self.assertNotIn("参与拼团", html)
        self.assertNotIn("订单编号", html)


class ChatRoutesTestCase(unittest.TestCase):
    """Test case for the chat blueprint."""

    def setUp(self):
        """Set up a test client with a mocked generation client."""
        patcher = patch("groupbuy.chat.services.genai.Client")
        self.mock_client_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.generate = self.mock_client_cls.return_value.models.generate_content
        self.generate.return_value.text = "699元起"

        self.app = create_app({**TEST_CONFIG, "GEMINI_API_KEY": "test-key"})
        self.client = self.app.test_client()

    def test_widget_opens_and_closes(self):
        html = self.client.get("/").get_data(as_text=True)
        self.assertIn("咨询顾问", html)

        html = self.client.post("/chat/open", follow_redirects=True).get_data(
            as_text=True
        )
        self.assertIn("智能顾问 AI", html)
        self.assertIn("同学你好", html)

        html = self.client.post("/chat/close", follow_redirects=True).get_data(
            as_text=True
        )
        self.assertNotIn("智能顾问 AI", html)

    def test_send_json(self):
        response = self.client.post("/chat/send", json={"message": "多少钱？"})
        self.assertEqual(response.status_code, 200)
        payload = response.get_json()
        self.assertTrue(payload["success"])
        self.assertEqual(payload["message"], "699元起")
        texts = [m["text"] for m in payload["data"]["messages"]]
        self.assertEqual(texts[1:], ["多少钱？", "699元起"])
        self.assertFalse(payload["data"]["busy"])

        self.mock_client_cls.assert_called_once_with(api_key="test-key")
        contents = self.generate.call_args.kwargs["contents"]
        self.assertEqual(
            contents[-1], {"role": "user", "parts": [{"text": "多少钱？"}]}
        )
        self.assertEqual(contents[0]["role"], "model")

    def test_send_form_renders_reply(self):
        html = self.client.post(
            "/chat/send", data={"message": "多少钱？"}, follow_redirects=True
        ).get_data(as_text=True)
        self.assertIn("bubble-user", html)
        self.assertIn("699元起", html)

    def test_blank_message_is_rejected(self):
        response = self.client.post("/chat/send", json={"message": "   "})
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.get_json()["success"])
        self.generate.assert_not_called()

    def test_transport_failure_is_a_reply(self):
        self.generate.side_effect = ConnectionError("offline")
        response = self.client.post("/chat/send", json={"message": "多少钱？"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["message"], "网络连接异常，请稍后再试。")

    def test_missing_key_is_a_reply(self):
        app = create_app({**TEST_CONFIG, "GEMINI_API_KEY": None})
        response = app.test_client().post("/chat/send", json={"message": "多少钱？"})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json()["message"], CHAT_CONFIG_ERROR)

    def test_messages_endpoint(self):
        self.client.post("/chat/send", json={"message": "多少钱？"})
        payload = self.client.get("/chat/messages").get_json()
        roles = [m["role"] for m in payload["data"]["messages"]]
        self.assertEqual(roles, ["model", "user", "model"])


if __name__ == "__main__":
    unittest.main()

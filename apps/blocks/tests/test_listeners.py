from __future__ import annotations

from unittest import mock

from django.core.cache import caches
from django.test import SimpleTestCase

from apps.blocks.registry import BlockHandler, HandlerRegistry
from apps.blocks.services.listeners import ListenerIndex


class ListenerIndexTests(SimpleTestCase):
    def setUp(self):
        caches["default"].clear()
        self.registry = HandlerRegistry()
        self.registry.register(BlockHandler("forum", lambda block, context: ""))
        self.registry.register(BlockHandler("shop", lambda block, context: ""), active=False)

    def test_core_is_always_active(self):
        index = ListenerIndex(lambda: [])

        self.assertEqual(index.active_handlers(), frozenset({"core"}))
        self.assertTrue(index.is_handler_active("core"))
        self.assertTrue(index.is_handler_active("core", frozenset()))

    def test_reports_registry_state(self):
        index = ListenerIndex(self.registry.active_namespaces)

        self.assertTrue(index.is_handler_active("forum"))
        self.assertFalse(index.is_handler_active("shop"))
        self.assertFalse(index.is_handler_active("unknown"))

    def test_index_is_memoized_until_handlers_change(self):
        source = mock.Mock(side_effect=self.registry.active_namespaces)
        index = ListenerIndex(source)

        index.active_handlers()
        index.active_handlers()
        self.assertEqual(source.call_count, 1)

        self.registry.activate("shop")

        self.assertIn("shop", index.active_handlers())
        self.assertEqual(source.call_count, 2)

    def test_deactivated_handler_drops_out(self):
        index = ListenerIndex(self.registry.active_namespaces)
        self.assertTrue(index.is_handler_active("forum"))

        self.registry.deactivate("forum")

        self.assertFalse(index.is_handler_active("forum"))

    def test_active_set_stays_in_process_memory(self):
        index = ListenerIndex(self.registry.active_namespaces)
        index.active_handlers()

        with mock.patch("apps.blocks.services.cache.ResultCache.backend", new_callable=mock.PropertyMock) as backend:
            index.refresh()
            self.assertIn("forum", index.active_handlers())

        backend.assert_not_called()

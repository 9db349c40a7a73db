from apps.blocks.registry import BlockHandler


def register(registry):
    registry.register(BlockHandler("tests.callable", lambda block, context: "callable"))

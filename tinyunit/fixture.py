"""
Base class for test classes.
"""


class TestFixture:
    """
    Optional base class for tinyunit test classes.

    Methods whose name starts with "test" are run in name order, each on a
    fresh instance, between setUp and tearDown. Classes not deriving from
    TestFixture work the same way; setUp and tearDown are then simply
    skipped when missing.
    """
    # Leave tinyunit classes to tinyunit when pytest is also collecting
    __test__ = False

    def setUp(self) -> None:
        pass


    def tearDown(self) -> None:
        pass

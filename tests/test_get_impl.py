"""
Unit tests for the get_impl and import_from utility functions.
"""

from abc import ABC, abstractmethod
import os
import unittest

from redpacket.util import get_impl, import_from


class BaseTestClass:
    """Base class for testing"""


class ValidSubclass(BaseTestClass):
    """Valid subclass of BaseTestClass"""


class InvalidClass:
    """Class that doesn't inherit from BaseTestClass"""


class AbstractTestClass(ABC):
    """Abstract base class for testing"""

    @abstractmethod
    def abstract_method(self):
        pass


class ConcreteTestClass(AbstractTestClass):
    """Concrete implementation of AbstractTestClass"""

    def abstract_method(self):
        return "implemented"


class TestGetImpl(unittest.TestCase):
    """Test cases for get_impl function"""

    def setUp(self):
        """Set up test fixtures"""
        self.test_env_var = "TEST_REDPACKET_IMPL_CLASS"
        self.original_env = os.environ.get(self.test_env_var)

    def tearDown(self):
        """Restore environment variable"""
        if self.original_env is None:
            os.environ.pop(self.test_env_var, None)
        else:
            os.environ[self.test_env_var] = self.original_env

    def test_get_impl_with_valid_env_var(self):
        """Test get_impl with valid environment variable"""
        os.environ[self.test_env_var] = "tests.test_get_impl.ValidSubclass"

        result = get_impl(self.test_env_var, BaseTestClass)

        self.assertEqual(result, ValidSubclass)

    def test_get_impl_with_standard_library_class(self):
        """Test get_impl with standard library class"""
        os.environ[self.test_env_var] = "collections.OrderedDict"

        result = get_impl(self.test_env_var, dict)

        from collections import OrderedDict

        self.assertEqual(result, OrderedDict)

    def test_get_impl_fallback_to_default(self):
        """Test get_impl falls back to default when no env var is set"""
        os.environ.pop(self.test_env_var, None)

        result = get_impl(self.test_env_var, BaseTestClass, ValidSubclass)

        self.assertEqual(result, ValidSubclass)

    def test_get_impl_empty_env_var_uses_default(self):
        """Test get_impl uses default when env var is empty or blank"""
        for value in ("", "   "):
            os.environ[self.test_env_var] = value
            result = get_impl(self.test_env_var, BaseTestClass, ValidSubclass)
            self.assertEqual(result, ValidSubclass)

    def test_get_impl_no_env_var_no_default_raises_error(self):
        """Test get_impl raises ValueError when no env var and no default"""
        os.environ.pop(self.test_env_var, None)

        with self.assertRaises(ValueError):
            get_impl(self.test_env_var, BaseTestClass)

    def test_get_impl_invalid_module_raises_error(self):
        """Test get_impl raises error for invalid module name"""
        os.environ[self.test_env_var] = "nonexistent.module.Class"

        with self.assertRaises(ModuleNotFoundError):
            get_impl(self.test_env_var, BaseTestClass)

    def test_get_impl_invalid_class_raises_error(self):
        """Test get_impl raises error for invalid class name"""
        os.environ[self.test_env_var] = "tests.test_get_impl.NonexistentClass"

        with self.assertRaises(AttributeError):
            get_impl(self.test_env_var, BaseTestClass)

    def test_get_impl_wrong_base_type_raises_error(self):
        """Test get_impl raises TypeError for wrong base type"""
        os.environ[self.test_env_var] = "tests.test_get_impl.InvalidClass"

        with self.assertRaises(TypeError):
            get_impl(self.test_env_var, BaseTestClass)

    def test_get_impl_not_a_type_raises_error(self):
        """Test get_impl raises TypeError when the name is not a class"""
        os.environ[self.test_env_var] = "os.path.join"

        with self.assertRaises(TypeError):
            get_impl(self.test_env_var, BaseTestClass)

    def test_get_impl_default_wrong_base_type_raises_error(self):
        """Test get_impl raises TypeError when default is wrong type"""
        os.environ.pop(self.test_env_var, None)

        with self.assertRaises(TypeError):
            get_impl(self.test_env_var, BaseTestClass, InvalidClass)

    def test_get_impl_with_abstract_base_class(self):
        """Test get_impl with abstract base class"""
        os.environ[self.test_env_var] = "tests.test_get_impl.ConcreteTestClass"

        result = get_impl(self.test_env_var, AbstractTestClass)

        self.assertEqual(result, ConcreteTestClass)
        self.assertEqual(result().abstract_method(), "implemented")

    def test_get_impl_store_class(self):
        """Test get_impl with a packet store implementation"""
        from redpacket.mem.memory_packet_store import MemoryPacketStore
        from redpacket.packet_store import PacketStore

        os.environ[self.test_env_var] = "redpacket.mem.memory_packet_store.MemoryPacketStore"

        self.assertEqual(get_impl(self.test_env_var, PacketStore), MemoryPacketStore)


class TestImportFrom(unittest.TestCase):
    """Test cases for import_from function"""

    def test_import_class(self):
        self.assertIs(import_from("tests.test_get_impl.ValidSubclass"), ValidSubclass)

    def test_import_function(self):
        self.assertIs(import_from("os.path.join"), os.path.join)

    def test_import_missing(self):
        with self.assertRaises(AttributeError):
            import_from("os.path.nothing_here")


if __name__ == "__main__":
    unittest.main()

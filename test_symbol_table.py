import unittest
from symbol_table import VariableStore, MethodTable, MethodDefinition

class TestVariableStore(unittest.TestCase):
    def setUp(self):
        self.vars = VariableStore()

    def test_assign_and_get_global(self):
        """Test assigning a global and reading it back."""
        self.vars.assign("x", 10)
        self.assertEqual(self.vars.get("x"), 10)
        self.assertTrue(self.vars.is_defined("x"))
        self.assertIn("x", self.vars)
        self.assertEqual(self.vars.scope_level, 0)

    def test_undefined_variable(self):
        """Test reading an undefined name raises NameError."""
        self.assertIsNone(self.vars.lookup("missing"))
        with self.assertRaises(NameError):
            self.vars.get("missing")

    def test_shadowing(self):
        """Test a call-scope parameter shadows the global of the same name."""
        self.vars.assign("n", 1)
        self.vars.enter_scope({"n": 5})
        self.assertEqual(self.vars.get("n"), 5)
        self.assertTrue(self.vars.is_shadowed("n"))

        # Assignment updates the parameter, not the caller's global
        self.vars.assign("n", 6)
        self.assertEqual(self.vars.get("n"), 6)

        self.vars.exit_scope()
        self.assertEqual(self.vars.get("n"), 1)
        self.assertFalse(self.vars.is_shadowed("n"))

    def test_globals_visible_in_scope(self):
        """Test globals stay visible and assignable inside a call scope."""
        self.vars.assign("total", 0)
        self.vars.enter_scope({"step": 2})
        self.vars.assign("total", 4)
        self.vars.exit_scope()
        self.assertEqual(self.vars.get("total"), 4)
        self.assertNotIn("step", self.vars)

    def test_only_innermost_scope_visible(self):
        """Test an outer call's parameters are hidden in a nested call."""
        self.vars.enter_scope({"a": 1})
        self.vars.enter_scope({"b": 2})
        self.assertFalse(self.vars.is_defined("a"))
        self.assertEqual(self.vars.get("b"), 2)
        self.vars.exit_scope()
        self.assertEqual(self.vars.get("a"), 1)

    def test_exit_global_scope_error(self):
        """Test exiting the global scope raises RuntimeError."""
        with self.assertRaises(RuntimeError):
            self.vars.exit_scope()

    def test_snapshot(self):
        """Test snapshot overlays the innermost scope on the globals."""
        self.vars.assign("x", 1)
        self.vars.assign("y", 2)
        self.vars.enter_scope({"y": 9})
        self.assertEqual(self.vars.snapshot(), {"x": 1, "y": 9})

    def test_copy_is_independent(self):
        """Test copies do not share bindings."""
        self.vars.assign("x", 1)
        clone = self.vars.copy()
        clone.assign("x", 2)
        clone.enter_scope()
        self.assertEqual(self.vars.get("x"), 1)
        self.assertEqual(self.vars.scope_level, 0)

    def test_clear(self):
        self.vars.assign("x", 1)
        self.vars.enter_scope({"p": 1})
        self.vars.clear()
        self.assertNotIn("x", self.vars)
        self.assertEqual(self.vars.scope_level, 0)


class TestMethodTable(unittest.TestCase):
    def setUp(self):
        self.methods = MethodTable()

    def test_define_and_get(self):
        definition = self.methods.define("Box", ["w", "h"], 3)
        self.assertEqual(definition, MethodDefinition("Box", ["w", "h"], 3))
        self.assertIs(self.methods.get("Box"), definition)
        self.assertIn("Box", self.methods)
        self.assertEqual(len(self.methods), 1)
        self.assertIsNone(definition.end_line)

    def test_redefinition_error(self):
        """Test defining the same method twice raises NameError."""
        self.methods.define("Box", [], 0)
        with self.assertRaises(NameError):
            self.methods.define("Box", ["x"], 5)

    def test_undefined_method(self):
        with self.assertRaises(NameError):
            self.methods.get("Nope")

    def test_close_records_end_line(self):
        self.methods.define("Box", [], 2)
        self.methods.close("Box", 7)
        self.assertEqual(self.methods.get("Box").end_line, 7)

    def test_copy_is_independent(self):
        self.methods.define("Box", [], 2)
        clone = self.methods.copy()
        clone.define("Other", [], 9)
        self.assertNotIn("Other", self.methods)


if __name__ == '__main__':
    unittest.main()

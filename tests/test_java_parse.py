from textwrap import dedent

from javadeps.java_parse import (
	RegexJavaExtractor,
	find_class_references,
	parse_java_source,
	strip_comments_and_literals,
)


def test_parse_simple_source():
	code = dedent(
		"""
		package com.example;

		import java.util.List;
		import com.other.Thing;

		public class MyClass {
			private OtherClass field;
		}
		"""
	)
	unit = parse_java_source(code, "MyClass.java")
	assert unit.package == "com.example"
	assert unit.type_name == "MyClass"
	assert unit.fully_qualified_name == "com.example.MyClass"
	assert unit.imports == {"java.util.List", "com.other.Thing"}
	assert unit.class_references == {"OtherClass"}


def test_wildcard_imports_are_dropped():
	code = dedent(
		"""
		package com.example;
		import java.util.List;
		import java.util.Map;
		import java.util.*;  // Should be ignored
		public class Test {
		}
		"""
	)
	unit = parse_java_source(code, "Test.java")
	assert unit.imports == {"java.util.List", "java.util.Map"}
	assert unit.fully_qualified_name == "com.example.Test"


def test_static_import_depends_on_declaring_type():
	code = dedent(
		"""
		import static java.util.Collections.emptyList;
		import static org.junit.Assert.*;
		class Holder {}
		"""
	)
	unit = parse_java_source(code, "Holder.java")
	assert unit.imports == {"java.util.Collections"}


def test_duplicate_imports_collapse():
	code = "import a.b.C;\nimport a.b.C;\nimport  a . b . D ;\nclass X {}"
	unit = parse_java_source(code, "X.java")
	assert unit.imports == {"a.b.C", "a.b.D"}


def test_falls_back_to_filename():
	unit = parse_java_source("// Just a comment", "Simple.java")
	assert unit.type_name == "Simple"
	assert unit.package == ""
	assert unit.fully_qualified_name == "Simple"


def test_fallback_uses_base_name_of_path():
	unit = parse_java_source("", "src/main/java/Thing.java")
	assert unit.type_name == "Thing"


def test_source_without_package():
	unit = parse_java_source("public class Test {}", "Test.java")
	assert unit.package == ""
	assert unit.type_name == "Test"
	assert not unit.imports
	assert not unit.class_references


def test_generic_type_with_nested_class():
	code = dedent(
		"""
		package com.example;
		import java.util.List;
		public abstract class Test<T> {
			private class Inner {}
		}
		"""
	)
	unit = parse_java_source(code, "ComplexTest.java")
	assert unit.fully_qualified_name == "com.example.Test"
	assert unit.imports == {"java.util.List"}


def test_annotations_and_modifiers_before_type():
	code = dedent(
		"""
		@Deprecated
		@SuppressWarnings("unchecked")
		public final class Annotated {}
		"""
	)
	assert parse_java_source(code, "Other.java").type_name == "Annotated"
	assert parse_java_source("public @interface Marker {}", "X.java").type_name == "Marker"
	assert parse_java_source("enum Color { RED }", "X.java").type_name == "Color"


def test_comments_and_strings_are_ignored():
	code = dedent(
		"""
		package com.example; // package com.wrong;
		/* This class handles orders.
		   import com.example.Hidden; */
		// import com.example.Commented;
		import com.example.Visible;
		public class Real {
			String s = "import com.example.InString;";
			String url = "http://example.com";
		}
		"""
	)
	unit = parse_java_source(code, "Real.java")
	assert unit.package == "com.example"
	assert unit.type_name == "Real"
	assert unit.imports == {"com.example.Visible"}


def test_class_literal_is_not_a_declaration():
	code = "Object o = Foo.class;\ninterface Actual {}"
	assert parse_java_source(code, "X.java").type_name == "Actual"


def test_find_class_references():
	code = dedent(
		"""
		class MyClass {
			private OtherClass field;
			public void method(ThirdClass param) {
				String str = "FakeClass";
				Integer count = 0;
			}
		}
		"""
	)
	refs = find_class_references(strip_comments_and_literals(code), "MyClass")
	assert refs == {"OtherClass", "ThirdClass"}
	assert find_class_references("", "MyClass") == set()


def test_generic_arguments_are_references():
	code = "class Box {\n private Map<Key, Value> entries;\n}"
	assert parse_java_source(code, "Box.java").class_references == {"Map", "Key", "Value"}


def test_extractor_without_references():
	extractor = RegexJavaExtractor(with_references=False)
	unit = extractor.extract("class A { private B b; }", "A.java")
	assert unit.type_name == "A"
	assert unit.class_references == frozenset()
	assert unit.path == "A.java"

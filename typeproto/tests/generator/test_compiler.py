"""Tests for schema compilation."""

import pytest

from typeproto.generator import (
    CompilerOptions,
    CyclicTypeError,
    InvalidInputError,
    NameCollisionError,
    NestedContainerError,
    UnsupportedShapeError,
    compile_schema,
    generate_schema,
)
from typeproto.tests.generator.models import (
    Blank,
    Branch,
    Child,
    Color,
    Dangling,
    Either,
    Event,
    Hollow,
    Hyph,
    Inventory,
    Invoice,
    Matrix,
    Node,
    Pair,
    Paint,
    Palette,
    Parent,
    Person,
    Plain,
    RawList,
    RawMap,
    Record,
    Ring,
    Scores,
    Shape,
    Shipment,
    Stock,
    Weird,
)

ALL_VALID = [Record, Paint, Palette, Scores, Person, Branch, Invoice, Shipment, Inventory, Event, Plain]


def describe_flat_record():
    def compiles_scalars_as_optional_fields(expect):
        text = generate_schema(Record)
        expect(text) == (
            'syntax = "proto2";\n'
            "\n"
            "message GrpcRecord {\n"
            "\toptional sint32 id = 1;\n"
            "\toptional string label = 2;\n"
            "}\n"
            "\n"
            "message GrpcRecords {\n"
            "\trepeated GrpcRecord grpcRecord = 1;\n"
            "}\n"
            "\n"
        )

    def reports_emitted_blocks(expect):
        document = compile_schema(Record)
        expect(document.messages) == ["GrpcRecord", "GrpcRecords"]
        expect(document.enums) == []
        expect(document.imports) == []

    def is_deterministic(expect):
        for model in ALL_VALID:
            expect(generate_schema(model)) == generate_schema(model)


def describe_enum_fields():
    def emits_enum_before_owning_message(expect, blocks):
        parsed = blocks(generate_schema(Paint))
        expect([(kind, name) for kind, name, _ in parsed]) == [
            ("enum", "GrpcColor"),
            ("message", "GrpcPaint"),
            ("message", "GrpcPaints"),
        ]
        expect(parsed[0][2]) == ["RED = 0;", "GREEN = 1;", "BLUE = 2;"]
        expect(parsed[1][2]) == ["optional GrpcColor color = 1;"]

    def emits_each_enum_once(expect, blocks):
        parsed = blocks(generate_schema(Palette))
        expect([name for kind, name, _ in parsed if kind == "enum"]) == ["GrpcColor"]
        expect(parsed[1][2]) == [
            "optional GrpcColor primary = 1;",
            "optional GrpcColor secondary = 2;",
            "repeated GrpcColor history = 3;",
        ]

    def uses_configured_prefix(expect, blocks):
        parsed = blocks(generate_schema(Paint, CompilerOptions(prefix="Pb")))
        expect([name for _, name, _ in parsed]) == ["PbColor", "PbPaint", "PbPaints"]


def describe_list_fields():
    def uses_scalar_keyword_for_scalar_elements(expect, blocks):
        parsed = blocks(generate_schema(Scores))
        expect(parsed[0][2]) == ["repeated sint64 scores = 1;"]

    def compiles_nested_element_type_first(expect, blocks):
        parsed = blocks(generate_schema(Person))
        expect([name for _, name, _ in parsed]) == [
            "Address",
            "Addresss",
            "GrpcPerson",
            "GrpcPersons",
        ]
        expect(parsed[0][2]) == [
            "optional string street = 1;",
            "optional sint32 zip_code = 2;",
        ]
        expect(parsed[1][2]) == ["repeated Address address = 1;"]
        expect(parsed[2][2]) == [
            "optional string name = 1;",
            "repeated Address addresses = 2;",
        ]


def describe_array_and_collection_fields():
    def reference_the_element_type(expect, blocks):
        parsed = blocks(generate_schema(Shipment))
        expect([(kind, name) for kind, name, _ in parsed]) == [
            ("message", "Address"),
            ("message", "Addresss"),
            ("enum", "GrpcColor"),
            ("message", "GrpcShipment"),
            ("message", "GrpcShipments"),
        ]
        expect(parsed[3][2]) == [
            "repeated Address parcels = 1;",
            "repeated string labels = 2;",
            "repeated GrpcColor colors = 3;",
            "repeated Address route = 4;",
            "repeated bytes payload = 5;",
            "repeated int32 sizes = 6;",
        ]


def describe_composite_fields():
    def compiles_first_use_and_references_later_uses(expect, blocks):
        parsed = blocks(generate_schema(Branch))
        expect([name for _, name, _ in parsed]) == ["Leaf", "Leafs", "GrpcBranch", "GrpcBranchs"]
        expect(parsed[0][2]) == ["optional double weight = 1;"]
        expect(parsed[2][2]) == [
            "repeated Leaf left = 1;",
            "optional Leaf right = 2;",
        ]

    def compiles_distinct_types_sharing_a_name_separately(expect, blocks):
        parsed = blocks(generate_schema(Invoice))
        addresses = [lines for _, name, lines in parsed if name == "Address"]
        expect(len(addresses)) == 2
        expect(addresses[0]) == [
            "optional string street = 1;",
            "optional sint32 zip_code = 2;",
        ]
        expect(addresses[1]) == ["optional string account = 1;"]

    def supports_plain_annotated_classes(expect, blocks):
        parsed = blocks(generate_schema(Plain))
        expect([name for _, name, _ in parsed]) == ["Point", "Points", "GrpcPlain", "GrpcPlains"]
        expect(parsed[0][2]) == ["optional double x = 1;", "optional double y = 2;"]
        expect(parsed[2][2]) == ["optional string name = 1;", "repeated Point origin = 2;"]


def describe_map_fields():
    def emit_entry_messages(expect, blocks):
        parsed = blocks(generate_schema(Inventory))
        expect([(kind, name) for kind, name, _ in parsed]) == [
            ("message", "GrpcInventoryCountsEntry"),
            ("enum", "GrpcColor"),
            ("message", "Address"),
            ("message", "Addresss"),
            ("message", "GrpcInventoryStockLevelsEntry"),
            ("message", "GrpcInventory"),
            ("message", "GrpcInventorys"),
        ]
        expect(parsed[0][2]) == ["required string key = 1;", "required sint64 value = 2;"]
        expect(parsed[4][2]) == ["required GrpcColor key = 1;", "required Address value = 2;"]
        expect(parsed[5][2]) == [
            "repeated GrpcInventoryCountsEntry counts = 1;",
            "repeated GrpcInventoryStockLevelsEntry stock_levels = 2;",
        ]

    def join_hyphenated_field_names_in_entry_names(expect, blocks):
        parsed = blocks(generate_schema(Hyph))
        expect([name for _, name, _ in parsed]) == ["GrpcHyphByDayEntry", "GrpcHyph", "GrpcHyphs"]
        expect(parsed[1][2]) == ["repeated GrpcHyphByDayEntry by-day = 1;"]

    def reject_fields_whose_entry_names_clash(expect):
        with pytest.raises(NameCollisionError) as e:
            generate_schema(Stock)
        expect("GrpcStockABEntry" in str(e.value)) == True


def describe_scalar_fields():
    def unwraps_annotations_and_imports_well_known_types(expect, blocks):
        text = generate_schema(Event)
        expect(text.startswith(
            'syntax = "proto2";\n\nimport "google/protobuf/timestamp.proto";\n\nmessage GrpcEvent {\n'
        )) == True
        parsed = blocks(text)
        expect(parsed[0][2]) == [
            "optional google.protobuf.Timestamp at = 1;",
            "optional sint64 user = 2;",
            "optional string note = 3;",
            "optional string extra = 4;",
            "optional bool flag = 5;",
        ]

    def sanitizes_field_names(expect, blocks):
        parsed = blocks(generate_schema(Weird))
        expect(parsed[0][2]) == ["optional sint32 weirdname1 = 1;", "optional string ok = 2;"]

    def rejects_names_with_nothing_legal(expect):
        with pytest.raises(InvalidInputError):
            generate_schema(Blank)


def describe_document_invariants():
    def numbers_fields_from_one(expect, blocks):
        for model in ALL_VALID:
            for kind, _, lines in blocks(generate_schema(model)):
                if kind != "message":
                    continue
                ordinals = [int(line.rsplit("=", 1)[1].rstrip(";")) for line in lines]
                expect(ordinals) == list(range(1, len(lines) + 1))

    def follows_each_compiled_message_with_its_wrapper(expect, blocks):
        for model in ALL_VALID:
            parsed = blocks(generate_schema(model))
            i = 0
            while i < len(parsed):
                kind, name, _ = parsed[i]
                if kind == "enum" or name.endswith("Entry"):
                    i += 1
                    continue
                expect(parsed[i + 1][1]) == name + "s"
                expect(parsed[i + 1][2]) == [f"repeated {name} {name[0].lower() + name[1:]} = 1;"]
                i += 2


def describe_options():
    def writes_package(expect):
        text = generate_schema(Record, CompilerOptions(package="shop.v1"))
        expect(text.startswith('syntax = "proto2";\n\npackage shop.v1;\n\nmessage GrpcRecord {\n')) == True

    def omits_header(expect):
        text = generate_schema(Record, CompilerOptions(header=False))
        expect(text.startswith("\nmessage GrpcRecord {\n")) == True

    def uses_indent(expect):
        text = generate_schema(Record, CompilerOptions(indent="  "))
        expect("\n  optional sint32 id = 1;\n" in text) == True

    def names_root_without_prefix(expect, blocks):
        parsed = blocks(generate_schema(Record, CompilerOptions(prefix="")))
        expect(parsed[1]) == ("message", "Records", ["repeated Record record = 1;"])

    def rejects_bad_prefix(expect):
        with pytest.raises(InvalidInputError):
            CompilerOptions(prefix="1st")

    def rejects_bad_package(expect):
        with pytest.raises(InvalidInputError):
            CompilerOptions(package="shop..v1")


def describe_errors():
    def rejects_missing_root(expect):
        with pytest.raises(InvalidInputError):
            generate_schema(None)

    def rejects_non_composite_root(expect):
        for root in (int, Color, list[Record], "Record"):
            with pytest.raises(InvalidInputError):
                generate_schema(root)

    def rejects_direct_cycle(expect):
        with pytest.raises(CyclicTypeError) as e:
            generate_schema(Node)
        expect("Node -> Node" in str(e.value)) == True

    def rejects_transitive_cycle(expect):
        with pytest.raises(CyclicTypeError) as e:
            generate_schema(Parent)
        expect("Parent -> Child -> Parent" in str(e.value)) == True

    def rejects_cycle_through_a_list(expect):
        with pytest.raises(CyclicTypeError):
            generate_schema(Ring)

    def rejects_cycle_reached_from_any_member(expect):
        with pytest.raises(CyclicTypeError):
            generate_schema(Child)

    def rejects_unparameterized_containers(expect):
        for model in (RawList, RawMap):
            with pytest.raises(UnsupportedShapeError):
                generate_schema(model)

    def rejects_nested_containers(expect):
        with pytest.raises(NestedContainerError):
            generate_schema(Matrix)

    def rejects_fixed_tuples(expect):
        with pytest.raises(UnsupportedShapeError):
            generate_schema(Pair)

    def rejects_unions(expect):
        with pytest.raises(UnsupportedShapeError):
            generate_schema(Either)

    def rejects_unresolvable_annotations(expect):
        with pytest.raises(InvalidInputError):
            generate_schema(Dangling)

    def rejects_enum_sharing_the_root_name(expect):
        with pytest.raises(NameCollisionError) as e:
            generate_schema(Shape)
        expect("GrpcShape" in str(e.value)) == True

    def rejects_enums_without_members(expect):
        with pytest.raises(UnsupportedShapeError) as e:
            generate_schema(Hollow)
        expect("no members" in str(e.value)) == True

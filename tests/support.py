"""Business classes and schema models shared by the tests."""

from dataclasses import dataclass
from enum import Enum

from gql_bootstrap.core import (
    Argument,
    Array,
    ClassRegistry,
    EnumType,
    ErrorInfo,
    Field,
    InputType,
    InterfaceType,
    Operation,
    Reference,
    ReferenceType,
    SchemaModel,
    Type,
    class_name_of,
    get_execution_context,
)


# Widgets


class Color(Enum):
    RED = "red"
    GREEN = "green"


@dataclass
class Widget:
    id: str
    name: str | None = None
    color: Color = Color.RED
    secret_code: str = "s3cret"


@dataclass
class WidgetInput:
    name: str
    size: int = 1


class WidgetNotFound(Exception):
    pass


WIDGETS = {
    "1": Widget("1", "Sprocket"),
    "2": Widget("2", "Gear", Color.GREEN),
}


class WidgetService:
    def widget(self, id):
        return WIDGETS.get(id)

    def widgets(self, limit):
        return list(WIDGETS.values())[:limit]

    async def widget_async(self, id):
        return WIDGETS.get(id)

    def widget_or_fail(self, id):
        if id not in WIDGETS:
            raise WidgetNotFound(f"No widget {id}")
        return WIDGETS[id]

    def widgets_by_color(self, color):
        return [w for w in WIDGETS.values() if w.color is color]

    def whoami(self):
        ctx = get_execution_context()
        return f"{ctx.operation.name}:{ctx.request_context['user']}"

    def create_widget(self, input):
        return Widget(id="3", name=f"{input.name} x{input.size}")


# Pets


@dataclass
class Pet:
    name: str


@dataclass
class Owner:
    name: str


class PetService:
    calls: list[list[str]] = []

    def pets(self):
        return [Pet("Rex"), Pet("Tom"), Pet("Kitty")]

    def owners(self, pets):
        names = [getattr(p, "name", p) for p in pets]
        PetService.calls.append(names)
        return [[Owner(f"owner of {n}")] for n in names]

    def nickname(self, pet):
        return pet.name.lower()


# Animals


@dataclass
class Cat:
    name: str
    lives: int = 9


@dataclass
class Dog:
    name: str
    barks: bool = True


@dataclass
class Puppy(Dog):
    pass


class ZooService:
    def animals(self):
        return [Cat("Tom"), Dog("Rex"), Puppy("Bit")]


# Model builders


def scalar(name: str, cls: type = str) -> Reference:
    return Reference(name, class_name_of(cls), ReferenceType.SCALAR)


def ref(cls: type, kind: ReferenceType = ReferenceType.TYPE, name: str | None = None) -> Reference:
    return Reference(name or cls.__name__, class_name_of(cls), kind)


def operation(name, cls, method=None, returns=None, arguments=(), **kwargs) -> Operation:
    return Operation(
        name=name,
        reference=returns or scalar("String"),
        class_name=class_name_of(cls),
        method_name=method or name,
        arguments=list(arguments),
        **kwargs,
    )


def widget_type() -> Type:
    return Type(
        name="Widget",
        class_name=class_name_of(Widget),
        fields={
            "id": Field("id", scalar("ID"), not_null=True),
            "name": Field("name", scalar("String")),
            "color": Field("color", ref(Color, ReferenceType.ENUM)),
            "secretCode": Field("secretCode", scalar("String"), method_name="secret_code"),
        },
    )


def widget_model() -> SchemaModel:
    id_argument = Argument("id", scalar("ID"), not_null=True)
    return SchemaModel(
        queries=[
            operation("widget", WidgetService, returns=ref(Widget), arguments=[id_argument]),
            operation(
                "widgets",
                WidgetService,
                returns=ref(Widget),
                array=Array(depth=1, not_empty=True),
                not_null=True,
                arguments=[Argument("limit", scalar("Int", int), default_value="10")],
            ),
            operation("widgetAsync", WidgetService, "widget_async", ref(Widget), [id_argument]),
            operation("widgetOrFail", WidgetService, "widget_or_fail", ref(Widget), [id_argument]),
            operation(
                "widgetsByColor",
                WidgetService,
                "widgets_by_color",
                ref(Widget),
                [Argument("color", ref(Color, ReferenceType.ENUM), not_null=True)],
                array=Array(),
            ),
            operation("whoami", WidgetService),
        ],
        mutations=[
            operation(
                "createWidget",
                WidgetService,
                "create_widget",
                ref(Widget),
                [Argument("input", ref(WidgetInput, ReferenceType.INPUT), not_null=True)],
            ),
        ],
        types={"Widget": widget_type()},
        inputs={
            "WidgetInput": InputType(
                name="WidgetInput",
                class_name=class_name_of(WidgetInput),
                fields={
                    "name": Field("name", scalar("String"), not_null=True),
                    "size": Field("size", scalar("Int", int), default_value="3"),
                },
            ),
        },
        enums={"Color": EnumType("Color", class_name_of(Color), ["RED", "GREEN"])},
        errors={"WidgetNotFound": ErrorInfo(class_name_of(WidgetNotFound), "widget-not-found")},
    )


def widget_registry() -> ClassRegistry:
    return (
        ClassRegistry()
        .register(Widget)
        .register(WidgetInput)
        .register(WidgetService)
        .register(Color)
    )


def pet_model() -> SchemaModel:
    pets_argument = Argument("pets", ref(Pet), array=Array(), source_argument=True)
    pet_argument = Argument("pet", ref(Pet), source_argument=True)
    pet = Type(
        name="Pet",
        class_name=class_name_of(Pet),
        fields={"name": Field("name", scalar("String"), not_null=True)},
        operations=[operation("nickname", PetService, arguments=[pet_argument])],
        batch_operations=[
            operation("owners", PetService, returns=ref(Owner), arguments=[pets_argument], array=Array()),
        ],
    )
    owner = Type(
        name="Owner",
        class_name=class_name_of(Owner),
        fields={"name": Field("name", scalar("String"))},
    )
    return SchemaModel(
        queries=[operation("pets", PetService, returns=ref(Pet), array=Array())],
        types={"Pet": pet, "Owner": owner},
    )


def pet_registry() -> ClassRegistry:
    return ClassRegistry().register(Pet).register(Owner).register(PetService)


def zoo_model() -> SchemaModel:
    animal = Reference("Animal", "zoo.Animal", ReferenceType.INTERFACE)
    name_field = Field("name", scalar("String"), not_null=True)
    return SchemaModel(
        queries=[
            operation(
                "animals",
                ZooService,
                returns=animal,
                array=Array(),
            ),
        ],
        interfaces={
            "Animal": InterfaceType(
                name="Animal", class_name="zoo.Animal", fields={"name": name_field}
            ),
        },
        types={
            "Cat": Type(
                name="Cat",
                class_name=class_name_of(Cat),
                fields={"name": name_field, "lives": Field("lives", scalar("Int", int))},
                interfaces=[animal],
            ),
            "Dog": Type(
                name="Dog",
                class_name=class_name_of(Dog),
                fields={"name": name_field, "barks": Field("barks", scalar("Boolean", bool))},
                interfaces=[animal],
            ),
        },
    )


def zoo_registry() -> ClassRegistry:
    return ClassRegistry().register(Cat).register(Dog).register(ZooService)

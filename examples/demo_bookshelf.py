#!/usr/bin/env python3
"""Demonstration of compiling and executing a schema model.

This script shows how to:
1. Describe an API as a SchemaModel
2. Compile it into a graphql-core schema
3. Execute queries, with a batch operation answered in one call
"""

import asyncio
from dataclasses import dataclass

from graphql import print_schema

from gql_bootstrap.core import (
    Argument,
    Array,
    Bootstrap,
    ClassRegistry,
    Field,
    Operation,
    Reference,
    ReferenceType,
    SchemaExecutor,
    SchemaModel,
    Type,
    class_name_of,
)


@dataclass
class Book:
    title: str
    author_id: int


@dataclass
class Author:
    name: str


class Library:
    authors = {1: Author("Ursula K. Le Guin"), 2: Author("Stanislaw Lem")}

    def books(self):
        return [Book("The Dispossessed", 1), Book("Solaris", 2), Book("The Lathe of Heaven", 1)]

    def authors_of(self, books):
        print(f"   authors_of called once with {len(books)} books")
        return [self.authors[book.author_id] for book in books]


def build_model() -> SchemaModel:
    string = Reference("String", "builtins.str")
    book = Reference("Book", class_name_of(Book), ReferenceType.TYPE)
    author = Reference("Author", class_name_of(Author), ReferenceType.TYPE)
    return SchemaModel(
        queries=[
            Operation(
                name="books",
                reference=book,
                array=Array(not_empty=True),
                not_null=True,
                class_name=class_name_of(Library),
                method_name="books",
            ),
        ],
        types={
            "Book": Type(
                name="Book",
                class_name=class_name_of(Book),
                fields={"title": Field("title", string, not_null=True)},
                batch_operations=[
                    Operation(
                        name="author",
                        reference=author,
                        class_name=class_name_of(Library),
                        method_name="authors_of",
                        arguments=[Argument("books", book, array=Array(), source_argument=True)],
                    ),
                ],
            ),
            "Author": Type(
                name="Author",
                class_name=class_name_of(Author),
                fields={"name": Field("name", string)},
            ),
        },
    )


async def main():
    print("=== Schema Bootstrap Demo ===\n")

    print("1. Compiling the model...")
    registry = ClassRegistry().register(Book).register(Author).register(Library)
    result = Bootstrap.bootstrap(build_model(), class_registry=registry)
    print(f"   Batch loaders: {', '.join(result.batch_loaders.names)}")

    print("\n2. Schema:\n")
    print(print_schema(result.schema))

    print("\n3. Executing { books { title author { name } } }")
    executor = SchemaExecutor(result)
    data = await executor.execute_or_raise("{ books { title author { name } } }")
    for book in data["books"]:
        print(f"   {book['title']} by {book['author']['name']}")


if __name__ == "__main__":
    asyncio.run(main())

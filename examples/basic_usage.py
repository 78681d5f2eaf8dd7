#!/usr/bin/env python3
"""
Basic usage examples for the MongoDB wrapper library.

This example demonstrates:
1. Setting up configuration
2. Connecting and opening a collection
3. Duplicate-checked inserts
4. Existence-checked updates and deletes
5. Duplicate-checked subfield pushes
6. Driver pass-throughs
"""

import asyncio

from mongodb_wrapper import (
    DuplicateEntryError,
    MongoDBConfig,
    MongoWrapper,
    NonExistentEntryError,
    UpdateStrategy,
)


async def main():
    """Demonstrate basic usage of the MongoDB wrapper."""

    # 1. Configure MongoDB connection
    print("1. Setting up MongoDB configuration...")
    config = MongoDBConfig.from_env()  # Uses environment variables

    # For local development, you might use:
    # config = MongoDBConfig.for_local_development()

    # 2. Connect and open a collection
    print("2. Connecting...")
    async with MongoWrapper(config) as wrapper:
        teams = await wrapper.collection(config.get_collection_name("teams"))
        print(f"Opened collection: {teams.collection_name}")

        # 3. Insert documents (uuid must be unique)
        print("3. Inserting documents...")
        await teams.insert_one({"uuid": "team-1", "name": "Platform", "members": []})
        try:
            await teams.insert_one({"uuid": "team-1", "name": "Platform again"})
        except DuplicateEntryError as e:
            print(f"Duplicate rejected: {e}")

        # 4. Update and delete (a bare value is a uuid filter)
        print("4. Updating documents...")
        team = await teams.update_one("team-1", {"name": "Platform Engineering"})
        print(f"Renamed team: {team['name']}")

        await teams.update_one("team-1", {"size": 1}, UpdateStrategy.INC)

        try:
            await teams.delete_one("team-404")
        except NonExistentEntryError as e:
            print(f"Missing document: {e}")

        # update_many never checks for matches
        result = await teams.update_many({"name": "nobody"}, {"archived": True})
        print(f"update_many matched {result.matched_count} documents")

        # 5. Push subdocuments with a unique uuid
        print("5. Adding team members...")
        team = await teams.safe_insert_subfields("team-1", {"members": {"uuid": "m-1", "name": "Ada"}})
        print(f"Members: {[member['name'] for member in team['members']]}")
        try:
            await teams.safe_insert_subfields("team-1", {"members": {"uuid": "m-1", "name": "Ada"}})
        except DuplicateEntryError as e:
            print(f"Duplicate member rejected: {e}")

        # 6. Everything else goes straight to the driver
        print("6. Driver pass-throughs...")
        await teams.create_index("uuid", unique=True)
        async for document in teams.find({}, {"_id": 0, "uuid": 1, "name": 1}):
            print(f"Found: {document}")
        print(f"Collections: {await wrapper.list_collection_names()}")

        stats = await wrapper.stats()
        print(f"Database holds {stats.get('objects')} documents")

        await teams.delete_one("team-1")

    print("\n✅ MongoDB Wrapper Example Completed!")


if __name__ == "__main__":
    asyncio.run(main())

"""Domain entities, the room entity, value objects and small helpers."""
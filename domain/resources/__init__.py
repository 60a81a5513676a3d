"""Resources Bounded Context.

Responsible for the civic resources that radiate care energy:
- Value Objects: ResourcePoint, TypeProfile, default type catalogue
- Services: filter_by_types, count_by_type
- Ports: ResourceRepository
"""

from __future__ import annotations

import pytest

from contracts_desk.services.base_service import BaseService


def test_base_service_cannot_be_instantiated(database):
    with pytest.raises(TypeError):
        BaseService(database)


def test_subclass_must_define_search(database):
    class Incomplete(BaseService[str]):
        def load(self) -> list[str]:
            return self.items

    with pytest.raises(TypeError):
        Incomplete(database)

"""Concrete repository for the company settings singleton and the document counters."""

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bizdesk.application.interfaces import CounterKind
from bizdesk.domain.entities import CompanySettings, Counters
from bizdesk.infrastructure.database.models import CompanySettingsModel, CounterModel
from bizdesk.infrastructure.database.repositories.client_repository import as_utc

_COUNTER_ROW_ID = 1
_COUNTER_COLUMNS = {"quote": "quote_counter", "order": "order_counter"}

_SETTINGS_FIELDS = (
    "company_name",
    "tax_id",
    "address",
    "neighborhood",
    "city",
    "state",
    "zip_code",
    "phone",
    "whatsapp",
    "email",
    "logo",
)


class SQLAlchemyCompanySettingsRepository:
    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: CompanySettingsModel) -> CompanySettings:
        return CompanySettings(
            id=model.id,
            updated_at=as_utc(model.updated_at),
            **{name: getattr(model, name) for name in _SETTINGS_FIELDS},
        )

    async def _current(self) -> CompanySettingsModel | None:
        result = await self._session.execute(select(CompanySettingsModel).limit(1))
        return result.scalar_one_or_none()

    async def get(self) -> CompanySettings | None:
        model = await self._current()
        return self._to_entity(model) if model else None

    async def save(self, settings: CompanySettings) -> CompanySettings:
        """Overwrite the existing row, or insert the first one."""
        model = await self._current()
        if model is None:
            model = CompanySettingsModel(id=settings.id)
            self._session.add(model)
        for name in _SETTINGS_FIELDS:
            setattr(model, name, getattr(settings, name))
        model.updated_at = settings.updated_at
        await self._session.flush()
        return self._to_entity(model)

    async def _counter_row(self) -> CounterModel:
        model = await self._session.get(CounterModel, _COUNTER_ROW_ID)
        if model is None:
            model = CounterModel(id=_COUNTER_ROW_ID, quote_counter=1, order_counter=1)
            self._session.add(model)
            await self._session.flush()
        return model

    async def get_counters(self) -> Counters:
        model = await self._counter_row()
        return Counters(quote=model.quote_counter, order=model.order_counter)

    async def reserve(self, kind: CounterKind) -> int:
        """Advance a counter with a single UPDATE ... RETURNING and give back the value taken."""
        column_name = _COUNTER_COLUMNS.get(kind)
        if column_name is None:
            raise ValueError(f"Unknown counter: {kind}")
        await self._counter_row()

        column = getattr(CounterModel, column_name)
        result = await self._session.execute(
            update(CounterModel)
            .where(CounterModel.id == _COUNTER_ROW_ID)
            .values({column_name: column + 1})
            .returning(column)
            .execution_options(synchronize_session=False)
        )
        return result.scalar_one() - 1

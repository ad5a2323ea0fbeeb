from sheetbase.core.config import settings


class ActiveSheetPointer:
    """
    Активный лист на уровне процесса.

    Общий для всех клиентов и без синхронизации: последний вызов
    select() определяет, куда пойдут следующие чтения и записи.
    """

    def __init__(self, default_name: str):
        self.default_name = default_name
        self.name = default_name

    def select(self, name: str) -> str:
        self.name = name
        return self.name

    def reset(self) -> None:
        self.name = self.default_name

    def __repr__(self) -> str:
        return f"ActiveSheetPointer(name={self.name})"


active_sheet = ActiveSheetPointer(settings.default_sheet_name)

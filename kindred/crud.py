from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy.orm import Session

from . import models, schemas

ModelT = TypeVar("ModelT", bound=models.Base)

# ids outside a signed 64-bit integer cannot exist in any supported store
MIN_ID, MAX_ID = -(2 ** 63), 2 ** 63 - 1


class Accessor(Generic[ModelT]):
    """CRUD for one archive table.

    Database errors are not caught here; they reach the caller as raised by
    SQLAlchemy.
    """

    def __init__(self, model: Type[ModelT]):
        self.model = model

    def list(self, db: Session) -> List[ModelT]:
        return db.query(self.model).all()

    def get(self, db: Session, item_id: int) -> Optional[ModelT]:
        if not MIN_ID <= item_id <= MAX_ID:
            return None
        return db.query(self.model).filter(self.model.id == item_id).first()

    def create(self, db: Session, data: schemas.ArchiveModel) -> ModelT:
        db_item = self.model(**data.to_fields())
        db.add(db_item)
        db.commit()
        db.refresh(db_item)
        return db_item

    def update(
        self, db: Session, item_id: int, data: schemas.ArchiveModel
    ) -> Optional[ModelT]:
        db_item = self.get(db, item_id)
        if not db_item:
            return None
        fields = data.to_fields()
        if not fields:
            return db_item
        for name, value in fields.items():
            setattr(db_item, name, value)
        db.add(db_item)
        db.commit()
        db.refresh(db_item)
        return db_item

    def delete(self, db: Session, item_id: int) -> bool:
        db_item = self.get(db, item_id)
        if not db_item:
            return False
        db.delete(db_item)
        db.commit()
        return True


recipes = Accessor(models.Recipe)
legacy_audio = Accessor(models.LegacyAudio)
timeline_notes = Accessor(models.TimelineNote)


def get_recipe_by_title(db: Session, title: str):
    return db.query(models.Recipe).filter(models.Recipe.title == title).first()


def get_user(db: Session, user_id: str):
    return db.query(models.User).filter(models.User.id == user_id).first()


def get_user_by_username(db: Session, username: str):
    return db.query(models.User).filter(models.User.username == username).first()


def create_user(db: Session, user: schemas.UserCreate):
    db_user = models.User(username=user.username, password=user.password)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user

from sqlalchemy import (
    Column,
    Integer,
    String,
    Float,
    Boolean,
    JSON,
    Date,
    DateTime,
    ForeignKey,
    Text,
    Index,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import declarative_base, relationship

Base = declarative_base()


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    ingredients = Column(JSON, nullable=True)  # [{"item", "quantity", "measure", "unit_cost", "total_cost"}]
    method = Column(Text, nullable=True)
    plating_notes = Column(Text, nullable=True)
    file_url = Column(String, nullable=True)

    # Production spec fields
    yield_amount = Column(String, nullable=True)
    yield_measure = Column(String, nullable=True)
    shelf_life = Column(String, nullable=True)
    tools = Column(JSON, nullable=True)
    vehicle = Column(String, nullable=True)

    # Costing
    recipe_cost = Column(Float, nullable=True)
    portion_cost = Column(Float, nullable=True)
    menu_price = Column(Float, nullable=True)
    food_cost_percent = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    menu_items = relationship("MenuItem", back_populates="recipe")


class MenuItem(Base):
    __tablename__ = "menu_items"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    station = Column(String, nullable=False, default="line", index=True)  # grill/saute/fry/salad/line
    unit = Column(String, nullable=False, default="portions")
    category = Column(String, nullable=True)  # workbook category, e.g. "ENTREES"
    is_active = Column(Boolean, nullable=False, default=True, index=True)

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="SET NULL"), nullable=True)
    recipe = relationship("Recipe", back_populates="menu_items")

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    par_levels = relationship("ParLevel", back_populates="menu_item", cascade="all, delete-orphan")
    sales = relationship("SalesData", back_populates="menu_item", cascade="all, delete-orphan")
    prep_items = relationship("PrepListItem", back_populates="menu_item", cascade="all, delete-orphan")


class ParLevel(Base):
    """Target on-hand quantity of a menu item for one day of the week."""
    __tablename__ = "par_levels"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)  # 0=Sunday .. 6=Saturday
    par_quantity = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("menu_item_id", "day_of_week", name="uix_par_level_item_day"),
    )

    menu_item = relationship("MenuItem", back_populates="par_levels")


class SalesData(Base):
    __tablename__ = "sales_data"

    id = Column(Integer, primary_key=True, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)
    sales_date = Column(Date, nullable=False, index=True)
    quantity_sold = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    __table_args__ = (
        UniqueConstraint("menu_item_id", "sales_date", name="uix_sales_item_date"),
    )

    menu_item = relationship("MenuItem", back_populates="sales")


class PrepList(Base):
    """Daily prep list header. One list per prep date."""
    __tablename__ = "prep_lists"

    id = Column(Integer, primary_key=True, index=True)
    prep_date = Column(Date, nullable=False, unique=True)
    created_by = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    items = relationship("PrepListItem", back_populates="prep_list", cascade="all, delete-orphan")


class PrepListItem(Base):
    __tablename__ = "prep_list_items"

    id = Column(Integer, primary_key=True, index=True)
    prep_list_id = Column(Integer, ForeignKey("prep_lists.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(Integer, ForeignKey("menu_items.id", ondelete="CASCADE"), nullable=False)
    quantity_needed = Column(Integer, nullable=False, default=0)
    status = Column(String, nullable=False, default="open")  # open/in_progress/completed

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_prep_list_items_list_status", "prep_list_id", "status"),
    )

    prep_list = relationship("PrepList", back_populates="items")
    menu_item = relationship("MenuItem", back_populates="prep_items")

"""
对象字段枚举（FieldLister）。

归一化对象时分两轮取字段：
- enumerable：实例上的公开属性，按原名输出
- reflective：实例上全部属性、__slots__、类级数据属性（static），
  按 "<visibility>[ static] <name>" 输出；enumerable 已有的同名字段跳过

Python 没有访问修饰符，按命名约定判定可见性：
    name        → public
    _name       → protected
    __name      → private（实例 / 类字典里是改写后的 _Class__name）

特殊类型可通过 register_field_lister() 注册自定义 lister。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, List, Optional, Protocol, Tuple


class Visibility(str, Enum):
    PUBLIC = "public"
    PROTECTED = "protected"
    PRIVATE = "private"

    @classmethod
    def coerce(cls, value: Any) -> "Visibility":
        """无法识别的可见性一律按 public 处理"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            return cls.PUBLIC


@dataclass
class Field:
    """reflective 一轮产出的单个字段。attr 为对象上的真实属性名，用于与 enumerable 去重"""

    name: str
    value: Any
    visibility: Any = Visibility.PUBLIC
    static: bool = False
    attr: Optional[str] = None

    def __post_init__(self):
        if self.attr is None:
            self.attr = self.name

    @property
    def key(self) -> str:
        static = " static" if self.static else ""
        return f"{Visibility.coerce(self.visibility).value}{static} {self.name}"


class FieldLister(Protocol):
    def enumerable(self, obj: Any) -> Dict[str, Any]:
        ...

    def reflective(self, obj: Any) -> Iterable[Field]:
        ...


# ── 命名约定 ──

def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _mangle(klass: type, name: str) -> str:
    if not name.startswith("__") or name.endswith("__"):
        return name
    stripped = klass.__name__.lstrip("_")
    if not stripped:
        return name
    return f"_{stripped}{name}"


def _classify(attr: str, owners: Iterable[type]) -> Tuple[Visibility, str]:
    """返回 (可见性, 展示名)；private 属性还原为声明时的名字（去掉 _Class 前缀）"""
    for klass in owners:
        prefix = "_" + klass.__name__.lstrip("_") + "__"
        if len(prefix) > 3 and attr.startswith(prefix) and not attr.endswith("__"):
            return Visibility.PRIVATE, attr[len(prefix):]
    if attr.startswith("_"):
        return Visibility.PROTECTED, attr
    return Visibility.PUBLIC, attr


def _instance_dict(obj: Any) -> Dict[str, Any]:
    try:
        data = vars(obj)
    except TypeError:
        return {}
    return data if isinstance(data, dict) else dict(data)


def _slots_of(klass: type) -> List[str]:
    slots = klass.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        return [slots]
    return list(slots)


def _is_data_attribute(raw: Any) -> bool:
    if isinstance(raw, (staticmethod, classmethod, property)):
        return False
    if callable(raw):
        return False
    # 描述符（包括 __slots__ 生成的 member_descriptor）不是类级数据
    return not hasattr(type(raw), "__get__")


class DefaultFieldLister:
    """基于 vars() / __slots__ / 类字典的默认实现"""

    def enumerable(self, obj: Any) -> Dict[str, Any]:
        return {k: v for k, v in _instance_dict(obj).items() if not k.startswith("_")}

    def reflective(self, obj: Any) -> Iterator[Field]:
        mro = [klass for klass in type(obj).__mro__ if klass is not object]
        instance = _instance_dict(obj)
        taken = set(instance)

        for attr, value in instance.items():
            visibility, name = _classify(attr, mro)
            yield Field(name, value, visibility, attr=attr)

        for klass in mro:
            for slot in _slots_of(klass):
                if slot in ("__dict__", "__weakref__"):
                    continue
                attr = _mangle(klass, slot)
                if attr in taken:
                    continue
                taken.add(attr)
                try:
                    value = getattr(obj, attr)
                except AttributeError:
                    # 未赋值的 slot
                    continue
                visibility, name = _classify(attr, [klass])
                yield Field(name, value, visibility, attr=attr)

        for klass in mro:
            for attr, raw in vars(klass).items():
                if attr in taken:
                    continue
                taken.add(attr)
                if _is_dunder(attr) or not _is_data_attribute(raw):
                    continue
                visibility, name = _classify(attr, [klass])
                yield Field(name, raw, visibility, static=True, attr=attr)


DEFAULT_FIELD_LISTER = DefaultFieldLister()

_registry: Dict[type, FieldLister] = {}


def register_field_lister(cls: type, lister: FieldLister) -> None:
    """为某个类型（及其子类）注册自定义 lister"""
    _registry[cls] = lister


def unregister_field_lister(cls: type) -> None:
    _registry.pop(cls, None)


def get_field_lister(obj: Any) -> FieldLister:
    for klass in type(obj).__mro__:
        lister = _registry.get(klass)
        if lister is not None:
            return lister
    return DEFAULT_FIELD_LISTER

"""
值归一化：把任意 Python 值转成可 JSON 序列化的树。

- 基本类型原样返回
- list / tuple / set / dict 逐元素递归
- 对象转为 dict：___class_name + enumerable 字段 + reflective 字段
- 同一次 log 调用内，已进入过的对象再次出现时替换为
  "recursion - parent object [<类型名>]"，保证有环对象图也能终止
"""

from __future__ import annotations

import datetime
import decimal
import os
import types
from dataclasses import replace
from enum import Enum
from typing import Any, Dict, List, Optional, Set

from chromelogger.core.fields import get_field_lister
from chromelogger.core.models import JsonValue
from chromelogger.log import get_logger

logger = get_logger(__name__)

CLASS_NAME_KEY = "___class_name"

_PRIMITIVES = (type(None), bool, int, float, str)
_SEQUENCES = (list, tuple, set, frozenset)
# 有固定文本表示的值，交给 encoder 的 default 钩子
_SCALARS = (
    bytes,
    bytearray,
    complex,
    decimal.Decimal,
    datetime.date,
    datetime.time,
    datetime.timedelta,
)
_NOT_OBJECTS = (
    type,
    types.ModuleType,
    types.FunctionType,
    types.BuiltinFunctionType,
    types.MethodType,
    Enum,
)


def recursion_sentinel(value: Any) -> str:
    return f"recursion - parent object [{type(value).__name__}]"


def _unconvertible(value: Any, error: Exception) -> str:
    name = type(value).__name__
    logger.debug("[chromelogger] unconvertible %s: %s", name, error)
    return f"[unconvertible {name}]"


def is_object_like(value: Any) -> bool:
    """带身份与具名字段的实例（有 __dict__ 或 __slots__）"""
    if isinstance(value, _PRIMITIVES) or isinstance(value, _SEQUENCES) or isinstance(value, dict):
        return False
    if isinstance(value, _SCALARS) or isinstance(value, _NOT_OBJECTS):
        return False
    return hasattr(value, "__dict__") or hasattr(type(value), "__slots__")


class Normalizer:
    """
    单次 log 调用的归一化上下文。

    visited 记录本次调用中已进入的对象 id，调用结束即丢弃；
    同一调用的多个参数共享同一个 visited。
    """

    def __init__(self, visited: Optional[Set[int]] = None):
        self.visited: Set[int] = visited if visited is not None else set()
        # 当前路径上的容器 id，只用于打断自包含的 list / dict
        self._containers: List[int] = []

    def normalize(self, value: Any) -> JsonValue:
        """归一化一个值；类型探测本身抛异常（例如代理对象）时返回占位符"""
        try:
            return self._normalize(value)
        except Exception as e:
            return _unconvertible(value, e)

    def _normalize(self, value: Any) -> JsonValue:
        if isinstance(value, _PRIMITIVES):
            return value
        if isinstance(value, dict):
            return self._normalize_mapping(value)
        if isinstance(value, _SEQUENCES):
            return self._normalize_sequence(value)
        if isinstance(value, os.PathLike):
            return os.fspath(value)
        if is_object_like(value):
            return self._normalize_object(value)
        # 其它值交给 encoder 的 default 钩子决定最终文本
        return value

    def _child(self, value: Any, parent: Any = None) -> JsonValue:
        try:
            if is_object_like(value) and (value is parent or id(value) in self.visited):
                return recursion_sentinel(value)
            if isinstance(value, (dict,) + _SEQUENCES) and id(value) in self._containers:
                return recursion_sentinel(value)
        except Exception as e:
            return _unconvertible(value, e)
        return self.normalize(value)

    def _normalize_sequence(self, value: Any) -> List[JsonValue]:
        self._containers.append(id(value))
        try:
            return [self._child(item) for item in value]
        finally:
            self._containers.pop()

    def _normalize_mapping(self, value: Dict[Any, Any]) -> Dict[str, JsonValue]:
        self._containers.append(id(value))
        try:
            return {str(k): self._child(v) for k, v in value.items()}
        finally:
            self._containers.pop()

    def _normalize_object(self, obj: Any) -> JsonValue:
        self.visited.add(id(obj))
        try:
            lister = get_field_lister(obj)
            result: Dict[str, JsonValue] = {CLASS_NAME_KEY: type(obj).__name__}

            enumerable = lister.enumerable(obj)
            for key, value in enumerable.items():
                result[str(key)] = self._child(value, parent=obj)

            for field in lister.reflective(obj):
                if field.attr in enumerable:
                    continue
                key = field.key
                if key in result:
                    # 不同类各自声明的同名私有属性（_A__x / _B__x）改用真实属性名
                    key = replace(field, name=field.attr).key
                    if key in result:
                        continue
                result[key] = self._child(field.value, parent=obj)
            return result
        except Exception as e:
            return _unconvertible(obj, e)


def normalize(value: Any, visited: Optional[Set[int]] = None) -> JsonValue:
    """归一化单个值；visited 为 None 时使用全新的上下文"""
    return Normalizer(visited).normalize(value)


def normalize_args(args: Any) -> List[JsonValue]:
    """归一化一次 log 调用的全部参数（共享 visited）"""
    normalizer = Normalizer()
    return [normalizer.normalize(arg) for arg in args]

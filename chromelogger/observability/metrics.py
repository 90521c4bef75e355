"""
Prometheus metrics 定义。

所有指标集中定义，模块通过 `from chromelogger.observability.metrics import metrics` 引用。
"""

from prometheus_client import Counter, Histogram


class _Metrics:
    """集中管理所有 Prometheus 指标"""

    def __init__(self):
        # ── 日志行 ──
        self.rows_total = Counter(
            "chromelogger_rows_total",
            "写入 Session 的日志行数",
            ["kind"],  # log / warn / error / group / ...
        )

        # ── Header ──
        self.header_bytes = Histogram(
            "chromelogger_header_bytes",
            "每次写出的 header 行长度 (字节)",
            buckets=(256, 512, 1024, 2048, 4096, 8192, 16384, 65536),
        )
        self.payload_oversize_total = Counter(
            "chromelogger_payload_oversize_total",
            "header 超限被替换为错误行的次数",
        )
        self.errors_total = Counter(
            "chromelogger_errors_total",
            "log 调用内部被吞掉的异常数",
        )


# 单例
metrics = _Metrics()

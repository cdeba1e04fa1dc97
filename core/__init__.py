# -*- coding: utf-8 -*-
"""人生K线核心计算包：排盘、结果标准化、校验与插值（纯函数，无I/O）"""

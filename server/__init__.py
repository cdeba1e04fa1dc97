# -*- coding: utf-8 -*-
"""人生K线 API 服务"""

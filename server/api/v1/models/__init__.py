# -*- coding: utf-8 -*-
"""请求模型"""

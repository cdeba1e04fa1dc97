# -*- coding: utf-8 -*-
"""Prompt 模板"""

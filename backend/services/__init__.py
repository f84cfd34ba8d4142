# -*- coding: utf-8 -*-
"""Services 模块"""

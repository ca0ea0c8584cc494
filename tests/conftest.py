# tests/conftest.py
"""
テスト共通の設定。PySide6のウィジェットテストはディスプレイのない環境でも動くよう、
offscreenプラットフォームを既定にします。
"""
import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

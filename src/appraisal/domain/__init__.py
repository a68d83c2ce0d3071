"""Domain layer - framework-free submission logic and ports"""

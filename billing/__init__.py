"""Work-order billing and payment reconciliation"""
